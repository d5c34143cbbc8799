"""Render del reporte en texto plano.

Por qué está en adapters:
- El formato de salida (banners, numeración, sangrías) es presentación.
- El Core entrega secciones ya ordenadas; aquí solo se formatean.
"""

from __future__ import annotations

from typing import Mapping, Sequence

BANNER_WIDTH = 80
REPORT_TITLE = "ANALYZING DRIVERS, VEHICLES AND RESERVATIONS DATA"
REPORT_FOOTER = "ANALYSIS COMPLETE"
_INDENT = "   "


def _banner(text: str) -> list[str]:
    rule = "=" * BANNER_WIDTH
    return [rule, text, rule]


def render(sections: Mapping[str, Sequence[str]]) -> str:
    """Formatea las secciones en el orden de inserción, numeradas desde 1."""

    lines: list[str] = []
    for number, (title, body) in enumerate(sections.items(), start=1):
        lines.append(f"{number}. {title}:")
        lines.extend(f"{_INDENT}{line}" if line else "" for line in body)
        lines.append("")
    return "\n".join(lines) + "\n" if lines else ""


def render_report(sections: Mapping[str, Sequence[str]]) -> str:
    """Reporte completo: cabecera, secciones y pie."""

    header = "\n".join(_banner(REPORT_TITLE)) + "\n\n"
    footer = "\n".join(_banner(REPORT_FOOTER)) + "\n"
    return header + render(sections) + footer
