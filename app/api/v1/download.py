from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, JSONResponse

from app.api.dependencies import get_artifact_store
from app.artifacts.store import ArtifactStore

router = APIRouter()


@router.get("/download/{file}", summary="Download a rendered document")
async def download(file: str, artifact_store: ArtifactStore = Depends(get_artifact_store)):
    path = artifact_store.resolve(file)
    if path is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "File not found"})
    return FileResponse(path, media_type="application/pdf", filename=path.name)
