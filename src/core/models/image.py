"""Shared image models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class BlobEntry(BaseModel):
    """Store-level view of a single object."""

    key: StrictStr = Field(..., description="Object key")
    size: StrictInt = Field(..., description="Object size in bytes")
    content_type: StrictStr | None = Field(None, description="Stored Content-Type, if any")
    last_modified: datetime = Field(..., description="Store timestamp for the object")
    metadata: dict[str, str] = Field(default_factory=dict, description="User metadata")


class ImageRecord(BaseModel):
    """Display record returned by the gallery listing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: StrictStr = Field(..., description="Object key in the bucket")
    display_name: StrictStr = Field(..., description="Basename of the key")
    original_name: StrictStr | None = Field(None, description="Client-supplied file name")
    url: StrictStr = Field(..., description="Proxy-serve path for the image")
    upload_time: datetime = Field(..., description="Store creation timestamp (UTC)")
    size: StrictInt = Field(..., description="Image size in bytes")
    content_type: StrictStr | None = Field(None, description="MIME type of the image")
