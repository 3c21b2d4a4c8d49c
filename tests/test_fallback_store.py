from congregation.modules.groups.fallback import FallbackMembershipStore
from congregation.modules.groups.schemas import FallbackMembership, MembershipStatus


def test_missing_file_is_empty(fallback_store):
    assert fallback_store.load("user-a") == []


def test_add_pending_is_idempotent(fallback_store):
    assert fallback_store.add_pending("user-a", "g1") is True
    assert fallback_store.add_pending("user-a", "g1") is False

    entries = fallback_store.load("user-a")
    assert len(entries) == 1
    assert entries[0].status == MembershipStatus.PENDING


def test_entries_persist_in_directory(tmp_path):
    directory = str(tmp_path / "store")
    FallbackMembershipStore(directory).add_pending("user-a", "g1")

    assert [e.group_id for e in FallbackMembershipStore(directory).load("user-a")] == ["g1"]


def test_user_id_is_sanitised_in_file_name(fallback_store):
    fallback_store.add_pending("../evil/user", "g1")
    files = list(fallback_store.directory.iterdir())
    assert [f.name for f in files] == ["group_memberships____evil_user.json"]


def test_unreadable_file_is_ignored(fallback_store):
    fallback_store.directory.mkdir(parents=True)
    fallback_store._path("user-a").write_text("{not json", encoding="utf-8")
    assert fallback_store.load("user-a") == []


def test_approved_filters_entries(fallback_store):
    fallback_store.save("user-a", [
        FallbackMembership(group_id="g1", user_id="user-a", status=MembershipStatus.PENDING),
        FallbackMembership(group_id="g2", user_id="user-a", status=MembershipStatus.APPROVED),
    ])
    assert [e.group_id for e in fallback_store.approved("user-a")] == ["g2"]
