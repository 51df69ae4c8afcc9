from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path
from typing import Callable

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFError, TTFont

logger = logging.getLogger("app.artifacts")

# Regular/bold pairs tried in order when no font is configured.
_TTF_CANDIDATES: tuple[tuple[str, str | None], ...] = (
    ("/usr/share/fonts/truetype/freefont/FreeSans.ttf", "/usr/share/fonts/truetype/freefont/FreeSansBold.ttf"),
    ("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
    ("/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf", "/usr/share/fonts/truetype/noto/NotoSans-Bold.ttf"),
    ("/Library/Fonts/Arial Unicode.ttf", None),
    ("C:/Windows/Fonts/arialuni.ttf", None),
)

# Script-specific faces used only for characters the main face lacks.
_TTF_FALLBACKS: tuple[str, ...] = (
    "/usr/share/fonts/truetype/noto/NotoSansDevanagari-Regular.ttf",
    "/usr/share/fonts/truetype/lohit-devanagari/Lohit-Devanagari.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
)

_CJK_RANGES = ((0x2E80, 0x9FFF), (0xF900, 0xFAFF), (0xFF00, 0xFFEF))
_HANGUL_RANGES = ((0x1100, 0x11FF), (0x3130, 0x318F), (0xAC00, 0xD7AF))

Coverage = Callable[[int], bool]


def _in_ranges(ranges: tuple[tuple[int, int], ...]) -> Coverage:
    return lambda cp: any(lo <= cp <= hi for lo, hi in ranges)


def _latin1(cp: int) -> bool:
    return cp < 256


@dataclass(frozen=True)
class FontSet:
    """Fonts for one document: a main face plus per-character fallbacks."""

    regular: str
    bold: str
    covers: Coverage
    fallbacks: tuple[tuple[str, Coverage], ...] = ()

    def font_for(self, char: str, *, bold: bool = False) -> str:
        cp = ord(char)
        main = self.bold if bold else self.regular
        if self.covers(cp):
            return main
        for name, covers in self.fallbacks:
            if covers(cp):
                return name
        return main

    def runs(self, text: str, *, bold: bool = False) -> list[tuple[str, str]]:
        """Split ``text`` into consecutive ``(font name, segment)`` pairs."""
        out: list[tuple[str, str]] = []
        for char in text:
            name = self.font_for(char, bold=bold)
            if out and out[-1][0] == name:
                out[-1] = (name, out[-1][1] + char)
            else:
                out.append((name, char))
        return out

    def width(self, text: str, size: float, *, bold: bool = False) -> float:
        return sum(pdfmetrics.stringWidth(seg, name, size) for name, seg in self.runs(text, bold=bold))


def _register_ttf(path: str | None) -> TTFont | None:
    if not path or not Path(path).is_file():
        return None
    name = f"GenE-{Path(path).stem}"
    try:
        font = TTFont(name, path)
    except TTFError as exc:
        logger.warning("pdf_font_unusable path=%s error=%s", path, exc)
        return None
    pdfmetrics.registerFont(font)
    return font


def _glyph_coverage(font: TTFont) -> Coverage:
    glyphs = font.face.charToGlyph
    return lambda cp: cp in glyphs


def _register_cid(name: str) -> str:
    pdfmetrics.registerFont(UnicodeCIDFont(name))
    return name


@lru_cache(maxsize=None)
def load_font_set(font_path: str | None = None, bold_font_path: str | None = None) -> FontSet:
    """Resolve the fonts used for rendered documents.

    A configured TrueType font wins; otherwise the first installed candidate
    is used, and Helvetica when none is found. CJK and Hangul always fall back
    to reportlab's built-in CID fonts, which need no font files.
    """
    pairs = ((font_path, bold_font_path),) if font_path else ()
    regular = bold = None
    chosen_path = None
    for regular_path, bold_path in pairs + _TTF_CANDIDATES:
        regular = _register_ttf(regular_path)
        if regular is not None:
            bold = _register_ttf(bold_path) or regular
            chosen_path = regular_path
            break

    fallbacks: list[tuple[str, Coverage]] = []
    for path in _TTF_FALLBACKS:
        if path == chosen_path:
            continue
        extra = _register_ttf(path)
        if extra is not None:
            fallbacks.append((extra.fontName, _glyph_coverage(extra)))
    fallbacks.append((_register_cid("STSong-Light"), _in_ranges(_CJK_RANGES)))
    fallbacks.append((_register_cid("HYSMyeongJo-Medium"), _in_ranges(_HANGUL_RANGES)))

    if regular is None:
        logger.warning("pdf_font_fallback: no Unicode TrueType font found, using Helvetica")
        return FontSet(regular="Helvetica", bold="Helvetica-Bold", covers=_latin1, fallbacks=tuple(fallbacks))
    return FontSet(
        regular=regular.fontName,
        bold=bold.fontName,
        covers=_glyph_coverage(regular),
        fallbacks=tuple(fallbacks),
    )
