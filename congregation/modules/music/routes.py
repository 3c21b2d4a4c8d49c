from fastapi import APIRouter, Depends
from congregation.modules.music.schemas import (
    TrackType, TrackCreate, TrackResponse, PlaylistCreate, PlaylistTrackAdd, PlaylistResponse
)
from congregation.modules.music.service import MusicService
from congregation.core.dependencies import require_admin, require_authenticated
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, get_gateway
from typing import List

router = APIRouter(prefix="/music", tags=["music"])


def get_music_service(gateway: DataGateway = Depends(get_gateway)) -> MusicService:
    return MusicService(gateway)


@router.get("/tracks", response_model=List[TrackResponse])
async def list_tracks(
    type: TrackType = TrackType.MUSIC,
    service: MusicService = Depends(get_music_service)
):
    """Music or podcast tracks"""
    return service.list_tracks(type)


@router.post("/tracks", response_model=TrackResponse, status_code=201)
async def create_track(
    track_data: TrackCreate,
    session: SessionContext = Depends(require_admin),
    service: MusicService = Depends(get_music_service)
):
    return service.create_track(track_data)


@router.delete("/tracks/{track_id}", status_code=204)
async def delete_track(
    track_id: str,
    session: SessionContext = Depends(require_admin),
    service: MusicService = Depends(get_music_service)
):
    service.delete_track(track_id)
    return None


@router.get("/playlists", response_model=List[PlaylistResponse])
async def list_playlists(
    session: SessionContext = Depends(require_authenticated),
    service: MusicService = Depends(get_music_service)
):
    return service.list_playlists(session)


@router.post("/playlists", response_model=PlaylistResponse, status_code=201)
async def create_playlist(
    playlist_data: PlaylistCreate,
    session: SessionContext = Depends(require_authenticated),
    service: MusicService = Depends(get_music_service)
):
    return service.create_playlist(session, playlist_data)


@router.post("/playlists/{playlist_id}/tracks", response_model=PlaylistResponse)
async def add_to_playlist(
    playlist_id: str,
    track: PlaylistTrackAdd,
    session: SessionContext = Depends(require_authenticated),
    service: MusicService = Depends(get_music_service)
):
    return service.add_to_playlist(session, playlist_id, track.track_id)
