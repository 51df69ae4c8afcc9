import sys
from dataclasses import replace
from io import BytesIO
from pathlib import Path
from zipfile import ZipFile

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.ai.gateway import GatewayError
from app.api.dependencies import get_artifact_store, get_gateway, get_settings
from app.artifacts.store import ArtifactStore
from app.core.config import settings
from app.core.lifespan import lifespan
from app.features.guardrail import REFUSAL_MESSAGE
from app.main import app
from app.parsing.models import UNSUPPORTED_FORMAT


class StubGateway:
    def __init__(self, reply: str = "stub reply", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: list[tuple[str, str]] = []

    async def send(self, system_instruction: str, prompt: str) -> str:
        self.calls.append((system_instruction, prompt))
        if self.fail:
            raise GatewayError()
        return self.reply


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def client(tmp_path: Path, gateway: StubGateway):
    store = ArtifactStore(tmp_path / "generated")
    cfg = replace(settings, upload_dir=str(tmp_path / "uploads"), max_upload_bytes=1024)
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_artifact_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: cfg
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _registered_paths() -> set[str]:
    return {route.path for route in app.routes}


def test_routes_are_registered() -> None:
    paths = _registered_paths()

    assert "/health" in paths
    assert "/api/chat" in paths
    assert "/api/upload" in paths
    assert "/download/{file}" in paths


def test_health_reports_service_and_timestamp(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == settings.service_name
    assert body["timestamp"]


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}, {"message": 42}, {"message": None}])
def test_chat_rejects_invalid_message(client: TestClient, gateway: StubGateway, body: dict) -> None:
    response = client.post("/api/chat", json=body)

    assert response.status_code == 400
    assert "error" in response.json()
    assert gateway.calls == []


def test_chat_guardrail_never_reaches_gateway(client: TestClient, gateway: StubGateway) -> None:
    response = client.post("/api/chat", json={"message": "Should I invest in crypto?"})

    assert response.status_code == 200
    assert response.json() == {"reply": REFUSAL_MESSAGE}
    assert gateway.calls == []


def test_chat_interview_prompt_contains_question_sections(client: TestClient, gateway: StubGateway) -> None:
    response = client.post("/api/chat", json={"message": "Tips for interview at Google"})

    assert response.status_code == 200
    assert response.json() == {"reply": "stub reply"}
    assert len(gateway.calls) == 1
    _, prompt = gateway.calls[0]
    assert "HR Questions" in prompt
    assert "Technical Questions" in prompt


def test_chat_resume_renders_downloadable_pdf(client: TestClient, gateway: StubGateway) -> None:
    gateway.reply = "## Professional Summary\nEngineer with 5 years of experience."

    response = client.post("/api/chat", json={"message": "Create my resume: Python, SQL"})

    assert response.status_code == 200
    body = response.json()
    assert body["reply"] == gateway.reply
    assert body["pdf"].startswith("/download/resume-")

    download = client.get(body["pdf"])
    assert download.status_code == 200
    assert download.headers["content-type"] == "application/pdf"
    assert download.content.startswith(b"%PDF")


class FailingArtifactStore(ArtifactStore):
    def render(self, text: str):
        raise OSError(28, "No space left on device")


def test_chat_resume_render_failure_still_returns_reply(
    client: TestClient, gateway: StubGateway, tmp_path: Path
) -> None:
    app.dependency_overrides[get_artifact_store] = lambda: FailingArtifactStore(tmp_path)

    response = client.post("/api/chat", json={"message": "Build my resume"})

    assert response.status_code == 200
    assert response.json() == {"reply": "stub reply"}


def test_chat_prompt_wraps_raw_message(client: TestClient, gateway: StubGateway) -> None:
    raw = "  Tips for interview at Google\n"

    response = client.post("/api/chat", json={"message": raw})

    assert response.status_code == 200
    _, prompt = gateway.calls[0]
    assert prompt.endswith(raw)


def test_chat_gateway_failure_returns_generic_500(client: TestClient, gateway: StubGateway) -> None:
    gateway.fail = True

    response = client.post("/api/chat", json={"message": "What career suits me?"})

    assert response.status_code == 500
    assert response.json() == {"error": "AI processing failed"}


def test_download_missing_artifact_returns_404(client: TestClient) -> None:
    response = client.get("/download/resume-doesnotexist.pdf")

    assert response.status_code == 404
    assert response.json() == {"error": "File not found"}


def test_upload_txt_is_analysed_and_cleaned_up(client: TestClient, gateway: StubGateway, tmp_path: Path) -> None:
    response = client.post(
        "/api/upload",
        files={"file": ("cv.txt", b"Jane Doe, data analyst with SQL", "text/plain")},
    )

    assert response.status_code == 200
    assert response.json() == {"reply": "stub reply"}
    _, prompt = gateway.calls[0]
    assert "Jane Doe, data analyst with SQL" in prompt
    assert "Document Overview" in prompt
    assert list((tmp_path / "uploads").iterdir()) == []


def test_upload_zip_entries_reach_prompt(client: TestClient, gateway: StubGateway) -> None:
    buf = BytesIO()
    with ZipFile(buf, "w") as archive:
        archive.writestr("one.txt", "first entry")
        archive.writestr("two.txt", "second entry")

    response = client.post("/api/upload", files={"file": ("docs.zip", buf.getvalue(), "application/zip")})

    assert response.status_code == 200
    assert "first entry\n\nsecond entry" in gateway.calls[0][1]


def test_upload_without_file_returns_400(client: TestClient, gateway: StubGateway) -> None:
    response = client.post("/api/upload", data={"other": "value"})

    assert response.status_code == 400
    assert gateway.calls == []


def test_upload_unsupported_format_is_rejected(client: TestClient, gateway: StubGateway, tmp_path: Path) -> None:
    response = client.post("/api/upload", files={"file": ("tool.exe", b"MZ", "application/octet-stream")})

    assert response.status_code == 422
    assert response.json() == {"error": UNSUPPORTED_FORMAT}
    assert gateway.calls == []
    assert list((tmp_path / "uploads").iterdir()) == []


def test_upload_forwards_sentinel_when_configured(client: TestClient, gateway: StubGateway, tmp_path: Path) -> None:
    cfg = replace(settings, upload_dir=str(tmp_path / "uploads"), forward_extraction_failures=True)
    app.dependency_overrides[get_settings] = lambda: cfg

    response = client.post("/api/upload", files={"file": ("tool.exe", b"MZ", "application/octet-stream")})

    assert response.status_code == 200
    assert UNSUPPORTED_FORMAT in gateway.calls[0][1]


def test_upload_over_size_cap_returns_413(client: TestClient, gateway: StubGateway, tmp_path: Path) -> None:
    response = client.post("/api/upload", files={"file": ("big.txt", b"x" * 2048, "text/plain")})

    assert response.status_code == 413
    assert gateway.calls == []
    assert list((tmp_path / "uploads").iterdir()) == []


def test_upload_gateway_failure_returns_500(client: TestClient, gateway: StubGateway) -> None:
    gateway.fail = True

    response = client.post("/api/upload", files={"file": ("cv.txt", b"hello", "text/plain")})

    assert response.status_code == 500
    assert response.json() == {"error": "AI processing failed"}


def _lifespan_app(api_key: str | None) -> FastAPI:
    test_app = FastAPI(lifespan=lifespan)
    test_app.state.settings = replace(settings, openai_api_key=api_key, ai_provider="openai")
    return test_app


def test_startup_fails_without_credentials() -> None:
    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        with TestClient(_lifespan_app(None)):
            pass


def test_startup_builds_gateway_with_credentials() -> None:
    test_app = _lifespan_app("sk-test-key")

    with TestClient(test_app):
        assert test_app.state.gateway is not None
    assert test_app.state.gateway is None
