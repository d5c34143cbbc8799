"""Adaptadores de infraestructura (HTTP, render de texto, exportación JSON)."""
