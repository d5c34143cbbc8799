"""Core de tour-recon: dominio, configuración y servicios (sin I/O de red ni CLI)."""
