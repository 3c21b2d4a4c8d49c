from fastapi import APIRouter, Depends
from congregation.modules.sermons.schemas import SermonCreate, SermonUpdate, SermonResponse
from congregation.modules.sermons.service import SermonService
from congregation.core.dependencies import require_admin
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from typing import List, Optional

router = APIRouter(prefix="/sermons", tags=["sermons"])


def get_sermon_service(gateway: DataGateway = Depends(get_gateway)) -> SermonService:
    return SermonService(gateway)


@router.get("", response_model=List[SermonResponse])
async def list_sermons(
    limit: Optional[int] = None,
    service: SermonService = Depends(get_sermon_service)
):
    return service.list_sermons(limit=limit)


@router.get("/latest", response_model=Optional[SermonResponse])
async def latest_sermon(service: SermonService = Depends(get_sermon_service)):
    return service.latest_sermon()


@router.post("", response_model=SermonResponse, status_code=201)
async def create_sermon(
    sermon_data: SermonCreate,
    session: SessionContext = Depends(require_admin),
    service: SermonService = Depends(get_sermon_service)
):
    return service.create_sermon(sermon_data)


@router.put("/{sermon_id}", response_model=SermonResponse)
async def update_sermon(
    sermon_id: str,
    sermon_data: SermonUpdate,
    session: SessionContext = Depends(require_admin),
    service: SermonService = Depends(get_sermon_service)
):
    return service.update_sermon(sermon_id, sermon_data)


@router.delete("/{sermon_id}", status_code=204)
async def delete_sermon(
    sermon_id: str,
    session: SessionContext = Depends(require_admin),
    service: SermonService = Depends(get_sermon_service)
):
    service.delete_sermon(sermon_id)
    return None
