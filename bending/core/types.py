"""Element metadata: colors & abbreviations for presentation adapters.

Provides:
  ELEMENT_COLORS_HEX: mapping element -> hex color string (#RRGGBB)
  ELEMENT_ABBREVIATIONS: mapping element -> 3-letter abbreviation (upper)
  helpers producing rich markup for element labels.
"""
from __future__ import annotations
from typing import Dict

ELEMENT_COLORS_HEX: Dict[str, str] = {
    "water": "#2980EF",
    "fire": "#E62829",
    "earth": "#3FA129",
    "air": "#E2BF65",
    "avatar": "#A98FF3",
}

ELEMENT_ABBREVIATIONS: Dict[str, str] = {
    "water": "WTR",
    "fire": "FIR",
    "earth": "ETH",
    "air": "AIR",
    "avatar": "AVT",
}

def element_abbreviation(element: str) -> str:
    return ELEMENT_ABBREVIATIONS.get(element.lower(), element[:3].upper())

def element_markup(element: str, text: str | None = None) -> str:
    """Wrap ``text`` (default: the abbreviation) in rich color markup."""
    label = text if text is not None else element_abbreviation(element)
    hex_val = ELEMENT_COLORS_HEX.get(element.lower())
    if not hex_val:
        return label
    return f"[{hex_val}]{label}[/{hex_val}]"

__all__ = [
    'ELEMENT_COLORS_HEX', 'ELEMENT_ABBREVIATIONS',
    'element_abbreviation', 'element_markup',
]
