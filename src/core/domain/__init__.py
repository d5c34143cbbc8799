"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos (Pydantic v2) de una conciliación.
- El dominio no conoce HTTP ni CLI: solo registros, hallazgos y resoluciones.
"""
