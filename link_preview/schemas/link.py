from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkMetadataRequest(BaseModel):
    url: str = Field(min_length=1)


class LinkMetadata(BaseModel):
    """Preview record for a single URL.

    ``url`` is the caller's input, unchanged. Every other field is ``None``
    when the page carries no matching tag. ``image`` is the raw ``og:image``
    value and may be relative.
    """

    url: str = Field(min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    site_name: Optional[str] = None

    model_config = ConfigDict(frozen=True)
