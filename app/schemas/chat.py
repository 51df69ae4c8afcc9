from pydantic import BaseModel, StrictStr


class ChatRequest(BaseModel):
    message: StrictStr | None = None


class ChatResponse(BaseModel):
    reply: str
    pdf: str | None = None


class UploadResponse(BaseModel):
    reply: str


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
