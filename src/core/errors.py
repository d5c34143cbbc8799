"""Errores del Core.

Solo los fallos de obtención de datos son errores: una referencia sin resolver
es un resultado normal y se reporta como hallazgo.
"""

from __future__ import annotations


class ReconError(Exception):
    """Base de los errores fatales de una ejecución."""


class FetchError(ReconError):
    """Fallo de red o respuesta no 2xx al pedir una sección."""

    def __init__(self, section: str, url: str, message: str, *, status_code: int | None = None) -> None:
        self.section = section
        self.url = url
        self.status_code = status_code
        detail = f"HTTP {status_code}: {message}" if status_code is not None else message
        super().__init__(f"could not fetch section '{section}' from {url} ({detail})")


class ParseError(ReconError):
    """El cuerpo de la respuesta no es JSON válido o no tiene la forma esperada."""

    def __init__(self, section: str, url: str, message: str) -> None:
        self.section = section
        self.url = url
        super().__init__(f"invalid payload for section '{section}' from {url} ({message})")
