from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from congregation.config import settings
from congregation.modules.media.schemas import MediaKind, UploadResponse
from congregation.modules.media.storage import MediaStorage, build_object_name
from congregation.core.dependencies import require_permission
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway

router = APIRouter(prefix="/media", tags=["media"])


def get_media_storage(gateway: DataGateway = Depends(get_gateway)) -> MediaStorage:
    return MediaStorage(gateway)


@router.post("/upload", response_model=UploadResponse, status_code=201)
async def upload_media(
    file: UploadFile = File(...),
    kind: MediaKind = Form(MediaKind.IMAGE),
    session: SessionContext = Depends(require_permission("media:upload")),
    storage: MediaStorage = Depends(get_media_storage)
):
    """
    Upload an image or video to the media bucket and return its public URL,
    ready to be stored on a blog post, sermon or group.
    """
    content_type = file.content_type or ""
    if not content_type.startswith(f"{kind.value}/"):
        raise HTTPException(status_code=400, detail=f"Expected an {kind.value} file, got '{content_type or 'unknown'}'")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"File exceeds {settings.max_upload_mb} MB")

    path = build_object_name(kind, file.filename)
    try:
        public_url = storage.upload_file(content, path, content_type)
    except Exception as e:
        raise HTTPException(
            status_code=502,
            detail=f"Upload failed: {e}. Please ensure a public storage bucket named '{storage.bucket_name}' exists."
        )
    return UploadResponse(kind=kind, path=path, public_url=public_url)
