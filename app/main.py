import json
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sentry_sdk
import uvicorn

from app.api.v1.health import router as health_router
from app.api.v1.chat import router as chat_router
from app.api.v1.upload import router as upload_router
from app.api.v1.download import router as download_router
from app.artifacts.store import ArtifactStore
from app.core.cors import cors_allowed_origins
from app.core.config import settings
from dotenv import load_dotenv
from app.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger("app.api")

app = FastAPI(title="GEN-E Career Assistant API", version="0.1.0", lifespan=lifespan)
app.state.settings = settings
app.state.artifact_store = ArtifactStore(
    settings.artifact_dir,
    font_path=settings.pdf_font_path,
    bold_font_path=settings.pdf_bold_font_path,
)
app.state.gateway = None

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(settings),
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(json.dumps({"event": "request_invalid", "path": request.url.path, "errors": len(exc.errors())}))
    message = "Invalid request."
    if request.url.path == "/api/chat":
        message = "Message is required and must be a non-empty string."
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


app.include_router(health_router, tags=["Health"])
app.include_router(chat_router, prefix="/api", tags=["Chat"])
app.include_router(upload_router, prefix="/api", tags=["Upload"])
app.include_router(download_router, tags=["Download"])


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
