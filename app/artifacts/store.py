from __future__ import annotations

import json
import logging
import re
import secrets
from dataclasses import dataclass
from pathlib import Path

from app.artifacts.fonts import load_font_set
from app.artifacts.render import render_text_pdf

logger = logging.getLogger("app.artifacts")

DOWNLOAD_PREFIX = "/download"
_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+\.pdf$")


@dataclass(frozen=True)
class RenderedArtifact:
    name: str
    path: Path

    @property
    def download_path(self) -> str:
        return f"{DOWNLOAD_PREFIX}/{self.name}"


class ArtifactStore:
    """Rendered documents on local disk, addressed by generated name.

    Names carry a random 128-bit token so concurrent renders never share a
    file. Nothing is ever expired or deleted here.
    """

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "resume",
        *,
        font_path: str | None = None,
        bold_font_path: str | None = None,
    ):
        self._directory = Path(directory)
        self._prefix = prefix
        self._font_path = font_path
        self._bold_font_path = bold_font_path

    def _new_name(self) -> str:
        return f"{self._prefix}-{secrets.token_hex(16)}.pdf"

    def render(self, text: str) -> RenderedArtifact:
        self._directory.mkdir(parents=True, exist_ok=True)
        name = self._new_name()
        path = self._directory / name
        fonts = load_font_set(self._font_path, self._bold_font_path)
        path.write_bytes(render_text_pdf(text, title=name, fonts=fonts))
        logger.info(json.dumps({"event": "artifact_rendered", "name": name, "bytes": path.stat().st_size}))
        return RenderedArtifact(name=name, path=path)

    def resolve(self, name: str) -> Path | None:
        if not _NAME_RE.match(name or ""):
            return None
        path = self._directory / name
        if not path.is_file():
            return None
        return path
