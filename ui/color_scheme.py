"""
ui/color_scheme.py
==================
Immutable theme: colour name -> RGBA.

The scheme is built once at startup from :data:`ui.constants.DEFAULT_COLORS`
plus optional overrides (usually a JSON theme file).  Drawing code only
ever *reads* it, and an unknown name is a bug, so :meth:`ColorScheme.get`
raises instead of inventing a colour.
"""

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Sequence

from .constants import DEFAULT_COLORS
from .types import ColorRGBA

log = logging.getLogger(__name__)


class UnknownColorError(KeyError):
    """A colour name that the theme does not define."""


def _to_rgba(name: str, value: Sequence[int]) -> ColorRGBA:
    if len(value) == 3:
        value = (*value, 255)
    if len(value) != 4 or not all(isinstance(v, int) and 0 <= v <= 255 for v in value):
        raise ValueError(f"colour {name!r}: expected 3 or 4 bytes, got {value!r}")
    return tuple(value)  # type: ignore[return-value]


class ColorScheme(Mapping[str, ColorRGBA]):
    """Read-only mapping of every theme colour.

    Parameters
    ----------
    overrides : mapping, optional
        Replacement colours; every key must already be a known name.
    """

    def __init__(self, overrides: Optional[Mapping[str, Sequence[int]]] = None) -> None:
        colors: Dict[str, ColorRGBA] = dict(DEFAULT_COLORS)
        for name, value in (overrides or {}).items():
            if name not in DEFAULT_COLORS:
                raise UnknownColorError(f"theme overrides unknown colour {name!r}")
            colors[name] = _to_rgba(name, value)
        self._colors = MappingProxyType(colors)

    @classmethod
    def load(cls, path: str) -> ColorScheme:
        """Build a scheme from a JSON object of ``name: [r, g, b(, a)]``."""
        with open(path, "r", encoding="utf-8") as fh:
            overrides = json.load(fh)
        if not isinstance(overrides, dict):
            raise ValueError(f"{path}: theme must be a JSON object")
        log.info("loaded %d colour overrides from %s", len(overrides), path)
        return cls(overrides)

    def get(self, name: str) -> ColorRGBA:  # type: ignore[override]
        try:
            return self._colors[name]
        except KeyError:
            raise UnknownColorError(f"no colour named {name!r}") from None

    def __getitem__(self, name: str) -> ColorRGBA:
        return self.get(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)
