"""Request models of the v1 API"""

from pydantic import BaseModel


class MetadataRequest(BaseModel):
    """Body of a metadata request: the URL about to be bookmarked."""

    url: str
