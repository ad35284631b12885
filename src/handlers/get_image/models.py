from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class GetImageRequest(BaseModel):
    """Validation model for proxy-serve requests."""

    model_config = ConfigDict(str_strip_whitespace=True)

    key: StrictStr = Field(
        ...,
        min_length=1,
        description="Full object key, slashes included",
    )

    @field_validator("key")
    @classmethod
    def validate_key_not_blank(cls, value: str) -> str:
        if not value.strip("/"):
            raise ValueError("key must not be blank")
        return value
