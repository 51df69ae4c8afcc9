from __future__ import annotations

import re
from io import BytesIO

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from app.artifacts.fonts import FontSet, load_font_set

_HEADING_RE = re.compile(r"^\s*#{1,6}\s+")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")


def _plain(line: str) -> str:
    return _BOLD_RE.sub(r"\1", line)


def wrap_line(line: str, fonts: FontSet, size: float, max_width: float, *, bold: bool = False) -> list[str]:
    """Word-wrap ``line`` to ``max_width``; words that alone are too wide are split by character."""

    def fits(text: str) -> bool:
        return fonts.width(text, size, bold=bold) <= max_width

    def split_word(word: str) -> list[str]:
        pieces: list[str] = []
        cur = ""
        for char in word:
            if cur and not fits(cur + char):
                pieces.append(cur)
                cur = char
            else:
                cur += char
        pieces.append(cur)
        return pieces

    words = line.split()
    if not words:
        return [""]
    lines: list[str] = []
    cur = ""
    for word in words:
        test = f"{cur} {word}" if cur else word
        if fits(test):
            cur = test
            continue
        if cur:
            lines.append(cur)
        pieces = split_word(word) if not fits(word) else [word]
        lines.extend(pieces[:-1])
        cur = pieces[-1]
    lines.append(cur)
    return lines


def render_text_pdf(text: str, *, title: str | None = None, fonts: FontSet | None = None) -> bytes:
    """Lay ``text`` out on as many US Letter pages as it needs.

    Markdown headings are drawn bold without their ``#`` markers and long
    lines are word-wrapped to the printable width. Characters missing from
    the main font are drawn with a fallback face from ``fonts``.
    """
    fonts = fonts or load_font_set()
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=LETTER)
    if title:
        c.setTitle(title)
    width, height = LETTER

    left = 0.75 * inch
    right = 0.75 * inch
    top = 0.75 * inch
    bottom = 0.75 * inch

    body_size = 10.5
    header_size = 12.5
    leading = 14

    y = height - top
    max_width = width - left - right

    def new_page():
        nonlocal y
        c.showPage()
        y = height - top

    def ensure_space(lines_needed: int = 1):
        nonlocal y
        if y - (leading * lines_needed) <= bottom:
            new_page()

    def draw_line(line: str, size: float, bold: bool = False):
        nonlocal y
        for wrapped in wrap_line(line, fonts, size, max_width, bold=bold):
            ensure_space(1)
            x = left
            for font_name, segment in fonts.runs(wrapped, bold=bold):
                c.setFont(font_name, size)
                c.drawString(x, y, segment)
                x += c.stringWidth(segment, font_name, size)
            y -= leading

    for raw in (text or "").splitlines():
        line = raw.rstrip()
        if not line.strip():
            ensure_space(1)
            y -= leading / 2
            continue
        if _HEADING_RE.match(line):
            ensure_space(2)
            y -= leading / 2
            draw_line(_plain(_HEADING_RE.sub("", line)), header_size, bold=True)
            continue
        draw_line(_plain(line), body_size)

    c.showPage()
    c.save()
    return buf.getvalue()
