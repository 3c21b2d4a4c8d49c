from congregation.config import settings
from congregation.config.permissions_config import Role, role_has_permission
from congregation.core.session import SessionContext, resolve_session


def test_guest_session():
    session = resolve_session(None, gateway=None)
    assert session.is_authenticated is False
    assert session.role == Role.GUEST
    assert session.has_permission("groups:join") is False
    assert session.has_permission("blog:read") is True


def test_profile_role_is_used(gateway, fake_db):
    fake_db.seed("profiles", {"id": "u1", "email": "mod@example.com", "first_name": "Mo", "role": "MODERATOR"})
    session = resolve_session({"id": "u1", "email": "mod@example.com"}, gateway)
    assert session.role == Role.MODERATOR
    assert session.profile.first_name == "Mo"
    assert session.has_permission("groups:moderate")


def test_missing_profile_falls_back_to_member(gateway):
    session = resolve_session(
        {"id": "u2", "email": "new@example.com", "user_metadata": {"firstName": "Ada", "last_name": "Obi"}},
        gateway
    )
    assert session.role == Role.MEMBER
    assert session.profile.first_name == "Ada"
    assert session.profile.last_name == "Obi"


def test_profiles_table_missing_falls_back_to_member(gateway, fake_db):
    fake_db.missing.add("profiles")
    session = resolve_session({"id": "u3", "email": "x@example.com"}, gateway)
    assert session.is_authenticated
    assert session.role == Role.MEMBER


def test_unknown_role_value_is_member(gateway, fake_db):
    fake_db.seed("profiles", {"id": "u4", "email": "y@example.com", "role": "deacon"})
    assert resolve_session({"id": "u4", "email": "y@example.com"}, gateway).role == Role.MEMBER


def test_lowercase_role_value_is_accepted(gateway, fake_db):
    fake_db.seed("profiles", {"id": "u5", "email": "a@example.com", "role": "author"})
    assert resolve_session({"id": "u5", "email": "a@example.com"}, gateway).role == Role.AUTHOR


def test_admin_email_overrides_profile_role(gateway, fake_db, monkeypatch):
    monkeypatch.setattr(settings, "admin_emails", "Pastor@Church.org, other@church.org")
    fake_db.seed("profiles", {"id": "u6", "email": "pastor@church.org", "role": "MEMBER"})

    session = resolve_session({"id": "u6", "email": "pastor@church.org"}, gateway)
    assert session.is_admin
    assert session.has_permission("dashboard:read")


def test_role_permissions():
    assert role_has_permission(Role.AUTHOR, "media:upload")
    assert not role_has_permission(Role.MEMBER, "groups:moderate")
    assert role_has_permission(Role.ADMIN, "groups:delete")
    assert SessionContext.guest().permissions == SessionContext(role=Role.GUEST).permissions
