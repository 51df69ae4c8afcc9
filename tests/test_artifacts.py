import sys

import pytest
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from pypdf import PdfReader

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.artifacts.fonts import load_font_set
from app.artifacts.render import wrap_line
from app.artifacts.store import ArtifactStore


def test_render_returns_resolvable_artifact(tmp_path: Path) -> None:
    store = ArtifactStore(tmp_path / "generated")

    artifact = store.render("## Professional Summary\nBackend developer.")

    assert artifact.download_path == f"/download/{artifact.name}"
    assert store.resolve(artifact.name) == artifact.path
    assert artifact.path.read_bytes().startswith(b"%PDF")


def test_concurrent_renders_get_distinct_names(tmp_path: Path) -> None:
    store = ArtifactStore(tmp_path)

    with ThreadPoolExecutor(max_workers=8) as pool:
        artifacts = list(pool.map(store.render, [f"resume {i}" for i in range(16)]))

    names = {a.name for a in artifacts}
    assert len(names) == 16
    for artifact in artifacts:
        assert store.resolve(artifact.name) is not None


def test_long_text_spans_multiple_pages(tmp_path: Path) -> None:
    store = ArtifactStore(tmp_path)
    text = "\n".join(f"- Achievement number {i}" for i in range(200))

    artifact = store.render(text)

    assert len(PdfReader(str(artifact.path)).pages) > 1


def test_resolve_rejects_unknown_and_unsafe_names(tmp_path: Path) -> None:
    store = ArtifactStore(tmp_path / "generated")
    (tmp_path / "secret.pdf").write_bytes(b"%PDF-1.4")

    assert store.resolve("resume-missing.pdf") is None
    assert store.resolve("../secret.pdf") is None
    assert store.resolve("") is None


def _first_page_text(path: Path) -> str:
    return PdfReader(str(path)).pages[0].extract_text()


def test_cjk_text_survives_rendering(tmp_path: Path) -> None:
    artifact = ArtifactStore(tmp_path).render("张伟 简历\n## 工作经验")

    text = _first_page_text(artifact.path).replace(" ", "")
    assert "张伟简历" in text
    assert "工作经验" in text
    assert "■" not in text


def test_accented_latin_text_survives_rendering(tmp_path: Path) -> None:
    artifact = ArtifactStore(tmp_path).render("Zoë Müller, São Paulo")

    assert "ZoëMüller" in _first_page_text(artifact.path).replace(" ", "")


def test_devanagari_text_survives_rendering(tmp_path: Path) -> None:
    fonts = load_font_set()
    cp = ord("र")
    if not (fonts.covers(cp) or any(covers(cp) for _, covers in fonts.fallbacks)):
        pytest.skip("no installed font covers Devanagari")

    artifact = ArtifactStore(tmp_path).render("रोहित शर्मा — Data Analyst")

    text = _first_page_text(artifact.path).replace(" ", "")
    assert "रोहित" in text
    assert "DataAnalyst" in text


def test_cjk_characters_use_cid_fallback() -> None:
    fonts = load_font_set()
    if fonts.covers(ord("张")):
        pytest.skip("main font already covers CJK")

    runs = fonts.runs("Li 张伟")

    assert runs[-1] == ("STSong-Light", "张伟")
    assert "".join(segment for _, segment in runs) == "Li 张伟"


def test_overlong_word_is_split_to_fit_line() -> None:
    fonts = load_font_set()
    url = "https://www.linkedin.com/in/" + "very-long-profile-slug-" * 20
    max_width = 300

    lines = wrap_line(f"Profile: {url} end", fonts, 10.5, max_width)

    assert len(lines) > 2
    assert all(fonts.width(line, 10.5) <= max_width for line in lines)
    assert lines[0] == "Profile:"
    assert "".join(lines[1:]).replace(" ", "") == url + "end"


def test_wrap_keeps_short_words_together() -> None:
    fonts = load_font_set()

    assert wrap_line("Python SQL Docker", fonts, 10.5, 500) == ["Python SQL Docker"]
