from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from congregation.modules.auth.schemas import LoginRequest, RegisterRequest
from congregation.modules.auth.service import AuthService, clear_auth_cache

from tests.conftest import FakeSupabase


class FakeAuth:
    """Signing in rewrites the owning client's Authorization header, like the gotrue listener does."""

    def __init__(self, owner, with_session=True):
        self.owner = owner
        self.with_session = with_session
        self.get_user_calls = 0
        self.signed_out = []
        self.admin = SimpleNamespace(sign_out=self.signed_out.append)

    def _signed_in(self, user_id, email):
        user = SimpleNamespace(id=user_id, email=email)
        if not self.with_session:
            return SimpleNamespace(user=user, session=None)
        token = f"{user_id}-jwt"
        self.owner.options.headers["Authorization"] = f"Bearer {token}"
        return SimpleNamespace(user=user, session=SimpleNamespace(access_token=token))

    def sign_up(self, credentials):
        return self._signed_in("new-user", credentials["email"])

    def sign_in_with_password(self, credentials):
        return self._signed_in("user-a", credentials["email"])

    def get_user(self, jwt=None):
        self.get_user_calls += 1
        if jwt != "good":
            raise RuntimeError("invalid JWT")
        user = SimpleNamespace(id="user-a", email="a@example.com", user_metadata={}, app_metadata={})
        return SimpleNamespace(user=user)


@pytest.fixture(autouse=True)
def reset_auth_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


def _register_request():
    return RegisterRequest(email="new@church.org", password="secret123", first_name="Ada", last_name="Obi")


@pytest.fixture
def shared_client(fake_db):
    fake_db.auth = FakeAuth(fake_db)
    return fake_db


@pytest.fixture
def auth_client():
    client = FakeSupabase()
    client.auth = FakeAuth(client)
    return client


class TestRegister:
    def test_creates_member_profile_as_new_user(self, shared_client, auth_client):
        response = AuthService(shared_client, client_factory=lambda: auth_client).register(_register_request())

        assert response.requires_verification is False
        profile = auth_client.tables["profiles"][0]
        assert profile["id"] == "new-user"
        assert profile["role"] == "MEMBER"
        assert auth_client.postgrest.token == "new-user-jwt"

    def test_pending_verification_skips_profile(self, shared_client):
        auth_client = FakeSupabase()
        auth_client.auth = FakeAuth(auth_client, with_session=False)
        response = AuthService(shared_client, client_factory=lambda: auth_client).register(_register_request())

        assert response.requires_verification is True
        assert "profiles" not in auth_client.tables

    def test_missing_profiles_table_does_not_fail_registration(self, shared_client, auth_client):
        auth_client.missing.add("profiles")
        service = AuthService(shared_client, client_factory=lambda: auth_client)
        assert service.register(_register_request()).user_id == "new-user"


class TestSessionIsolation:
    def test_login_leaves_shared_client_anonymous(self, shared_client, auth_client):
        service = AuthService(shared_client, client_factory=lambda: auth_client)

        token = service.login(LoginRequest(email="member@church.org", password="secret123"))

        assert token.access_token == "user-a-jwt"
        assert shared_client.options.headers["Authorization"] == "Bearer anon-key"
        assert shared_client.postgrest.token is None

    def test_each_login_gets_its_own_client(self, shared_client):
        created = []

        def factory():
            client = FakeSupabase()
            client.auth = FakeAuth(client)
            created.append(client)
            return client

        service = AuthService(shared_client, client_factory=factory)
        service.login(LoginRequest(email="member@church.org", password="secret123"))
        service.login(LoginRequest(email="member@church.org", password="secret123"))
        assert len(created) == 2

    def test_logout_revokes_only_the_callers_token(self, shared_client):
        AuthService(shared_client).logout("user-a-jwt")
        assert shared_client.auth.signed_out == ["user-a-jwt"]

class TestCurrentUser:
    def test_identity_is_cached(self, fake_db):
        fake_db.auth = FakeAuth(fake_db)
        service = AuthService(fake_db)
        assert service.get_current_user("good")["id"] == "user-a"
        service.get_current_user("good")
        assert fake_db.auth.get_user_calls == 1

    def test_bad_token(self, fake_db):
        fake_db.auth = FakeAuth(fake_db)
        with pytest.raises(HTTPException) as exc_info:
            AuthService(fake_db).get_current_user("bad")
        assert exc_info.value.status_code == 401


class TestProfilesApi:
    def test_guest_has_no_profile(self, client):
        assert client.get("/api/v1/profiles/me").status_code == 401

    def test_me_returns_session_profile(self, client, session_holder, member):
        session_holder.use(member)
        assert client.get("/api/v1/profiles/me").json()["id"] == "user-a"

    def test_auth_me_lists_permissions(self, client, session_holder, member):
        session_holder.use(member)
        body = client.get("/api/v1/auth/me").json()
        assert body["role"] == "MEMBER"
        assert "groups:join" in body["permissions"]

    def test_admin_changes_role(self, client, session_holder, admin, fake_db):
        fake_db.seed("profiles", {"id": "user-a", "email": "a@example.com", "role": "MEMBER"})
        session_holder.use(admin)

        response = client.put("/api/v1/profiles/user-a", json={"role": "MODERATOR"})
        assert response.status_code == 200
        assert fake_db.tables["profiles"][0]["role"] == "MODERATOR"

    def test_member_cannot_change_own_role(self, client, session_holder, member, fake_db):
        fake_db.seed("profiles", {"id": "user-a", "email": "a@example.com", "role": "MEMBER"})
        session_holder.use(member)

        client.put("/api/v1/profiles/me", json={"first_name": "Ann", "role": "ADMIN"})
        assert fake_db.tables["profiles"][0]["role"] == "MEMBER"
        assert fake_db.tables["profiles"][0]["first_name"] == "Ann"

    def test_admin_cannot_delete_self(self, client, session_holder, admin):
        session_holder.use(admin)
        assert client.delete("/api/v1/profiles/admin-1").status_code == 400
