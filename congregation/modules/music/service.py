from congregation.core.errors import raise_http_error
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.music.schemas import (
    TrackType, TrackCreate, TrackResponse, PlaylistCreate, PlaylistResponse
)
from typing import List
from fastapi import HTTPException


class MusicService:
    def __init__(self, gateway: DataGateway):
        self.gateway = gateway

    def list_tracks(self, track_type: TrackType) -> List[TrackResponse]:
        try:
            result = self.gateway.execute(
                self.gateway.table("music_tracks").select("*").eq("type", track_type.value),
                "List tracks"
            )
        except GatewayError as e:
            raise_http_error(e, "List tracks")
        return [TrackResponse(**track) for track in result.data or []]

    def get_track(self, track_id: str) -> TrackResponse:
        try:
            result = self.gateway.execute(
                self.gateway.table("music_tracks").select("*").eq("id", track_id).limit(1),
                "Load track"
            )
        except GatewayError as e:
            raise_http_error(e, "Load track")
        if not result.data:
            raise HTTPException(status_code=404, detail="Track not found")
        return TrackResponse(**result.data[0])

    def create_track(self, track_data: TrackCreate) -> TrackResponse:
        try:
            result = self.gateway.execute(
                self.gateway.table("music_tracks").insert(track_data.model_dump(mode="json")),
                "Save track"
            )
        except GatewayError as e:
            raise_http_error(e, "Save track")
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save track")
        return TrackResponse(**result.data[0])

    def delete_track(self, track_id: str) -> bool:
        try:
            result = self.gateway.execute(
                self.gateway.table("music_tracks").delete().eq("id", track_id),
                "Delete track"
            )
        except GatewayError as e:
            raise_http_error(e, "Delete track")
        if not result.data:
            raise HTTPException(status_code=404, detail="Track not found")
        return True

    def list_playlists(self, session: SessionContext) -> List[PlaylistResponse]:
        try:
            result = self.gateway.execute(
                self.gateway.table("playlists").select("*").eq("user_id", session.user_id),
                "List playlists"
            )
        except GatewayError as e:
            raise_http_error(e, "List playlists")
        return [PlaylistResponse(**playlist) for playlist in result.data or []]

    def create_playlist(self, session: SessionContext, playlist_data: PlaylistCreate) -> PlaylistResponse:
        title = playlist_data.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Playlist name is required")
        try:
            result = self.gateway.execute(
                self.gateway.table("playlists").insert({"title": title, "user_id": session.user_id, "tracks": []}),
                "Create playlist"
            )
        except GatewayError as e:
            raise_http_error(e, "Create playlist")
        return PlaylistResponse(**result.data[0])

    def add_to_playlist(self, session: SessionContext, playlist_id: str, track_id: str) -> PlaylistResponse:
        """Append a copy of the track to one of the caller's playlists"""
        try:
            result = self.gateway.execute(
                self.gateway.table("playlists").select("*").eq("id", playlist_id).eq("user_id", session.user_id).limit(1),
                "Load playlist"
            )
        except GatewayError as e:
            raise_http_error(e, "Load playlist")
        if not result.data:
            raise HTTPException(status_code=404, detail="Playlist not found")

        track = self.get_track(track_id)
        tracks = list(result.data[0].get("tracks") or [])
        tracks.append(track.model_dump(mode="json"))
        try:
            updated = self.gateway.execute(
                self.gateway.table("playlists").update({"tracks": tracks}).eq("id", playlist_id),
                "Add to playlist"
            )
        except GatewayError as e:
            raise_http_error(e, "Add to playlist")
        return PlaylistResponse(**updated.data[0])
