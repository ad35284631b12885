"""Pydantic models for delete image request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class DeleteImageRequest(BaseModel):
    """Validation model for delete image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    key: StrictStr = Field(
        ...,
        min_length=1,
        description="Full object key to delete",
    )

    @field_validator("key")
    @classmethod
    def validate_key_not_blank(cls, value: str) -> str:
        if not value.strip("/"):
            raise ValueError("key must not be blank")
        return value


class DeleteImageResponse(BaseModel):
    """Response model for successful image deletion."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = Field(..., description="Success message")
    file_name: str = Field(..., description="Object key that was deleted")
