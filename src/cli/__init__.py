"""CLI (Typer) de tour-recon."""
