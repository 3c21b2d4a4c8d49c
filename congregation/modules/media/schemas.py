from enum import Enum
from pydantic import BaseModel


class MediaKind(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class UploadResponse(BaseModel):
    kind: MediaKind
    path: str
    public_url: str
