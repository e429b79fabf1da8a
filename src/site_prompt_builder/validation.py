from __future__ import annotations

import re
from typing import Any, Mapping

from .errors import InvalidColorError, MalformedResponseError
from .models.suggestions import ColorPalette

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and HEX_COLOR_PATTERN.match(value) is not None


def validate_palette(data: Any) -> ColorPalette:
    """Build a palette from an untrusted mapping, checking every color.

    Colors are checked one at a time in the order received; the first
    invalid value is reported.
    """
    if not isinstance(data, Mapping):
        raise MalformedResponseError(f"Paleta de cores em formato inesperado: {data!r}")
    for value in data.values():
        if not is_hex_color(value):
            raise InvalidColorError(value)
    missing = [key for key in ("primary", "accent") if key not in data]
    if missing:
        raise MalformedResponseError(f"Paleta de cores incompleta, faltando: {', '.join(missing)}")
    return ColorPalette.model_validate(data)


__all__ = ["HEX_COLOR_PATTERN", "is_hex_color", "validate_palette"]
