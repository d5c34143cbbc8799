"""Servicios del Core: indexado, resolución, verificación y orquestación."""
