import datetime as dt

import httpx
import pytest
from fastapi import HTTPException

from congregation.config.permissions_config import Role
from congregation.modules.bible.schemas import ReadingProgress
from congregation.modules.bible.service import BibleService
from congregation.modules.dashboard.service import DashboardService
from congregation.modules.media.schemas import MediaKind
from congregation.modules.media.storage import build_object_name
from congregation.modules.music.schemas import PlaylistCreate
from congregation.modules.music.service import MusicService
from congregation.modules.sermons.service import SermonService, extract_youtube_id

from tests.conftest import make_session


class TestSermons:
    @pytest.mark.parametrize("url", [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ?start=30",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
    ])
    def test_youtube_id(self, url):
        assert extract_youtube_id(url) == "dQw4w9WgXcQ"

    @pytest.mark.parametrize("url", [None, "", "https://vimeo.com/12345", "https://youtu.be/short"])
    def test_not_youtube(self, url):
        assert extract_youtube_id(url) is None

    def test_list_sermons_newest_first(self, gateway, fake_db):
        fake_db.seed(
            "sermons",
            {"title": "Old", "preacher": "P", "date_preached": "2025-01-05", "video_url": "https://youtu.be/dQw4w9WgXcQ"},
            {"title": "New", "preacher": "P", "date_preached": "2025-02-09", "video_url": "https://example.com/v.mp4"},
        )
        sermons = SermonService(gateway).list_sermons()
        assert [s.title for s in sermons] == ["New", "Old"]
        assert sermons[0].youtube_id is None
        assert sermons[1].youtube_id == "dQw4w9WgXcQ"

    def test_latest_sermon_without_table(self, gateway, fake_db):
        fake_db.missing.add("sermons")
        assert SermonService(gateway).latest_sermon() is None


class TestPlaylists:
    @pytest.fixture
    def service(self, gateway, fake_db):
        fake_db.seed("music_tracks", {"id": "t1", "title": "Amazing Grace", "artist": "Choir", "url": "https://a/1.mp3"})
        return MusicService(gateway)

    def test_add_track_to_own_playlist(self, service, member):
        playlist = service.create_playlist(member, PlaylistCreate(title="Sunday"))
        updated = service.add_to_playlist(member, playlist.id, "t1")
        assert [t.title for t in updated.tracks] == ["Amazing Grace"]

    def test_other_users_playlist_is_not_found(self, service, member):
        playlist = service.create_playlist(member, PlaylistCreate(title="Sunday"))
        with pytest.raises(HTTPException) as exc_info:
            service.add_to_playlist(make_session("user-b"), playlist.id, "t1")
        assert exc_info.value.status_code == 404

    def test_blank_name_rejected(self, service, member):
        with pytest.raises(HTTPException):
            service.create_playlist(member, PlaylistCreate(title="  "))


class TestBibleProgress:
    def test_missing_table_is_silent(self, gateway, fake_db, member):
        fake_db.missing.add("user_bible_progress")
        service = BibleService(gateway)
        assert service.get_progress(member) is None
        assert service.save_progress(member, ReadingProgress(book="John", chapter=3)).saved is False

    def test_save_then_load(self, gateway, member):
        service = BibleService(gateway)
        service.save_progress(member, ReadingProgress(book="John", chapter=3))
        saved = service.save_progress(member, ReadingProgress(book="John", chapter=4))

        assert saved.saved is True
        assert service.get_progress(member).chapter == 4

    async def test_fetch_passage(self, gateway):
        def handler(request):
            assert str(request.url).endswith("/1%20John+4")
            return httpx.Response(200, json={
                "reference": "1 John 4",
                "text": "Beloved, let us love one another",
                "translation_name": "World English Bible",
                "verses": [{"book_name": "1 John", "chapter": 4, "verse": 7, "text": "Beloved, let us love one another"}],
            })

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            passage = await BibleService(gateway, http_client).fetch_passage("1 John", 4)
        assert passage.reference == "1 John 4"
        assert passage.verses[0].verse == 7

    async def test_fetch_passage_not_found(self, gateway):
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(404))) as http_client:
            with pytest.raises(HTTPException) as exc_info:
                await BibleService(gateway, http_client).fetch_passage("Nope", 1)
        assert exc_info.value.detail == "Text not found."


class TestMedia:
    def test_object_name(self):
        assert build_object_name(MediaKind.IMAGE, "Photo.JPG", now=1700000000.5) == "image_1700000000500.jpg"
        assert build_object_name(MediaKind.VIDEO, None, now=1.0) == "video_1000"

    def test_upload(self, client, session_holder, fake_db):
        session_holder.use(make_session("author-1", role=Role.AUTHOR))
        response = client.post(
            "/api/v1/media/upload",
            files={"file": ("cover.png", b"\x89PNG data", "image/png")},
            data={"kind": "image"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["public_url"] == f"https://storage.test/blog-images/{body['path']}"
        assert ("blog-images", body["path"]) in fake_db.storage.uploads

    def test_wrong_content_type(self, client, session_holder):
        session_holder.use(make_session("author-1", role=Role.AUTHOR))
        response = client.post(
            "/api/v1/media/upload",
            files={"file": ("clip.mp4", b"data", "video/mp4")},
            data={"kind": "image"},
        )
        assert response.status_code == 400

    def test_member_cannot_upload(self, client, session_holder, member):
        session_holder.use(member)
        response = client.post("/api/v1/media/upload", files={"file": ("a.png", b"x", "image/png")})
        assert response.status_code == 403


class TestDashboard:
    def test_overview_without_memberships_table(self, gateway, workflow, fake_db):
        fake_db.seed("profiles", {"id": "u1"}, {"id": "u2"})
        fake_db.seed("sermons", {"title": "s"})
        fake_db.missing.add("group_memberships")

        overview = DashboardService(gateway, workflow).overview()
        assert overview.members == 2
        assert overview.sermons == 1
        assert overview.blogs == 0
        assert overview.pending_requests == 0

    def test_overview_counts_pending(self, gateway, workflow, fake_db):
        fake_db.seed(
            "group_memberships",
            {"group_id": "g1", "user_id": "u1", "status": "Pending"},
            {"group_id": "g1", "user_id": "u2", "status": "Approved"},
        )
        assert DashboardService(gateway, workflow).overview().pending_requests == 1

    def test_home_feed_survives_missing_tables(self, gateway, workflow, fake_db):
        fake_db.missing.update({"sermons", "blog_posts", "events"})
        feed = DashboardService(gateway, workflow).home_feed()
        assert feed.latest_sermon is None
        assert feed.recent_posts == []
        assert feed.upcoming_events == []

    def test_overview_requires_permission(self, client, session_holder, member):
        session_holder.use(member)
        assert client.get("/api/v1/dashboard/overview").status_code == 403

    def test_home_feed_over_http(self, client, fake_db):
        tomorrow = (dt.date.today() + dt.timedelta(days=1)).isoformat()
        fake_db.seed("events", {"title": "Picnic", "date": tomorrow})
        body = client.get("/api/v1/dashboard/home").json()
        assert [e["title"] for e in body["upcoming_events"]] == ["Picnic"]
