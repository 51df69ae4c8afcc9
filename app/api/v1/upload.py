from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from app.ai.gateway import GatewayError, ModelGateway
from app.api.dependencies import get_gateway, get_settings
from app.core.config import Settings
from app.schemas.chat import ErrorResponse, UploadResponse
from app.services.upload_service import (
    ExtractionFailedError,
    UploadTooLargeError,
    handle_upload,
)

router = APIRouter()


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload(
    file: UploadFile | None = File(default=None),
    gateway: ModelGateway = Depends(get_gateway),
    cfg: Settings = Depends(get_settings),
):
    if file is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "No file uploaded. Send the document in the 'file' form field."},
        )

    try:
        outcome = await handle_upload(file, gateway=gateway, cfg=cfg)
    except UploadTooLargeError as exc:
        return JSONResponse(
            status_code=413,
            content={"error": str(exc)},
        )
    except ExtractionFailedError as exc:
        return JSONResponse(
            status_code=422,
            content={"error": str(exc)},
        )
    except GatewayError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc)},
        )
    finally:
        await file.close()

    return UploadResponse(reply=outcome.reply)
