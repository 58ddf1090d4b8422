"""Icons drawn from the glyphs of an SVG icon font."""

from __future__ import annotations

import html
import io
import os
import xml.etree.ElementTree as ElementTree
from typing import IO, Mapping, Sequence, Union

GlyphSource = Union[str, os.PathLike, bytes, IO]
Color = Union[str, Sequence[int]]

WHITE = "#ffffff"


class GlyphFontError(ValueError):
    """The SVG font could not be read or holds an incomplete glyph."""


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def load_glyphs(source: GlyphSource) -> dict[str, str]:
    """Map each glyph name of an SVG font to its path data.

    ``source`` is a path, the font's bytes, or an open file.
    """
    if isinstance(source, bytes):
        stream: Union[str, os.PathLike, IO] = io.BytesIO(source)
    else:
        stream = source

    glyphs: dict[str, str] = {}
    try:
        for _, element in ElementTree.iterparse(stream, events=("start",)):
            if _local_name(element.tag) != "glyph":
                continue
            name = element.get("glyph-name", "")
            path_data = element.get("d", "")
            if not name or not path_data:
                raise GlyphFontError("glyph name or SVG path data not found in the SVG font")
            glyphs[name] = path_data
    except ElementTree.ParseError as exc:
        raise GlyphFontError(f"SVG parsing failed: {exc}") from exc
    except OSError as exc:
        raise GlyphFontError(f"cannot read SVG font: {exc}") from exc
    return glyphs


def _color_name(color: Color) -> str:
    if isinstance(color, str):
        value = color.strip().lower()
        if value.startswith("#") and len(value) == 4:
            value = "#" + "".join(ch * 2 for ch in value[1:])
        if len(value) == 7 and value.startswith("#"):
            try:
                int(value[1:], 16)
            except ValueError:
                pass
            else:
                return value
        raise ValueError(f"not a hex colour: {color!r}")
    components = list(color)
    if len(components) != 3 or not all(0 <= int(c) <= 255 for c in components):
        raise ValueError(f"not an RGB colour: {color!r}")
    return "#" + "".join(f"{int(c):02x}" for c in components)


def icon_svg(path_data: str, color: Color = WHITE) -> str:
    """A standalone SVG document drawing one font glyph in ``color``.

    The glyph is flipped and shifted from font coordinates into the view box.
    """
    fill = _color_name(color)
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<svg xmlns="http://www.w3.org/2000/svg"'
        ' version="1.1" baseProfile="full" viewBox="0 -64 512 512" xml:space="preserve">'
        f'<path transform="translate(0, 384), scale(1, -1)" fill="{fill}"'
        f' d="{html.escape(path_data, quote=True)}"/>'
        '</svg>'
    )


def icon(glyphs: Mapping[str, str], name: str, color: Color = WHITE) -> str:
    """The SVG for glyph ``name``; an unknown name gives an empty drawing."""
    return icon_svg(glyphs.get(name, ""), color)