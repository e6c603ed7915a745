#!/usr/bin/env python3
"""
Tests for the immutable colour scheme.
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest

from ui.color_scheme import ColorScheme, UnknownColorError
from ui.constants import DEFAULT_COLORS


class ColorSchemeTests(unittest.TestCase):
    def test_defaults(self) -> None:
        cs = ColorScheme()
        self.assertEqual(len(cs), len(DEFAULT_COLORS))
        self.assertEqual(cs.get("crosswalk"), DEFAULT_COLORS["crosswalk"])

    def test_unknown_name_fails_fast(self) -> None:
        cs = ColorScheme()
        with self.assertRaises(UnknownColorError):
            cs.get("sidewalk cornr")
        with self.assertRaises(KeyError):
            cs["nope"]

    def test_override(self) -> None:
        cs = ColorScheme({"signal overtime": [200, 10, 10]})
        self.assertEqual(cs.get("signal overtime"), (200, 10, 10, 255))

    def test_override_must_name_a_known_colour(self) -> None:
        with self.assertRaises(UnknownColorError):
            ColorScheme({"overtime": [255, 0, 0]})

    def test_bad_colour_value(self) -> None:
        with self.assertRaises(ValueError):
            ColorScheme({"crosswalk": [255, 255]})
        with self.assertRaises(ValueError):
            ColorScheme({"crosswalk": [256, 0, 0]})

    def test_read_only(self) -> None:
        cs = ColorScheme()
        with self.assertRaises(TypeError):
            cs["crosswalk"] = (0, 0, 0, 255)  # type: ignore[index]

    def test_load_json_theme(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "theme.json")
            with open(path, "w", encoding="utf-8") as fh:
                json.dump({"map background": [0, 0, 0, 255]}, fh)
            cs = ColorScheme.load(path)
        self.assertEqual(cs.get("map background"), (0, 0, 0, 255))
        self.assertEqual(cs.get("sidewalk"), DEFAULT_COLORS["sidewalk"])

    def test_theme_must_be_an_object(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "theme.json")
            with open(path, "w", encoding="utf-8") as fh:
                json.dump([1, 2, 3], fh)
            with self.assertRaises(ValueError):
                ColorScheme.load(path)


if __name__ == "__main__":
    unittest.main()
