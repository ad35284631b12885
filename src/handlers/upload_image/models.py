"""Pydantic models for image upload request/response."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ImageUploadRequest(BaseModel):
    """Validated view of the uploaded `image` form part."""

    file_name: str | None = Field(None, description="Client-supplied file name")
    content_type: str = Field(..., min_length=1, description="Declared MIME type")
    data: bytes = Field(..., description="Raw file bytes")
    size: int = Field(..., ge=0, description="Bytes received for the part")


class ImageUploadResponse(BaseModel):
    """Response model for successful image upload."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = Field(..., description="Success message")
    file_name: str = Field(..., description="Object key assigned to the upload")
    url: str = Field(..., description="Proxy-serve path for the image")
