"""
Community group membership workflow.

Per (user, group) pair the states are none -> pending -> approved, and an
administrator can delete the membership row from pending or approved, which
returns the pair to none. Members cannot leave or cancel on their own.

When the group_memberships table is missing the caller's statuses come from
the FallbackMembershipStore instead, so the group list keeps working.
"""
import logging
from typing import Dict, List, Tuple

from fastapi import HTTPException, status

from congregation.core.errors import raise_http_error
from congregation.core.session import SessionContext
from congregation.database.gateway import DataGateway, GatewayError
from congregation.modules.groups import join_registry
from congregation.modules.groups.fallback import FallbackMembershipStore
from congregation.modules.groups.schemas import (
    GroupStatus, GroupWithStatusResponse, MembershipResponse, MembershipStatus
)

logger = logging.getLogger(__name__)

MEMBERSHIPS_TABLE = "group_memberships"
PENDING_APPROVAL_MESSAGE = "Your request to join this group is pending approval."

_GROUP_STATUS = {
    MembershipStatus.PENDING.value: GroupStatus.PENDING,
    MembershipStatus.APPROVED.value: GroupStatus.APPROVED,
}


class MembershipWorkflow:
    def __init__(self, gateway: DataGateway, fallback_store: FallbackMembershipStore):
        self.gateway = gateway
        self.fallback_store = fallback_store

    # Member-facing operations

    def list_groups(self, session: SessionContext) -> List[GroupWithStatusResponse]:
        """All groups merged with the caller's status and the approved member count. Never raises."""
        try:
            result = self.gateway.execute(
                self.gateway.table("community_groups").select("*").order("name"),
                "List groups"
            )
        except GatewayError as e:
            logger.error(f"Could not load community groups: {e.message}")
            return []

        my_rows, approved_rows = self._load_memberships(session)
        my_status = {row["group_id"]: row.get("status") for row in my_rows}
        approved_counts: Dict[str, int] = {}
        for row in approved_rows:
            approved_counts[row["group_id"]] = approved_counts.get(row["group_id"], 0) + 1

        groups = []
        for group in result.data or []:
            group_status = _GROUP_STATUS.get(my_status.get(group["id"]), GroupStatus.NONE)
            groups.append(GroupWithStatusResponse(
                **{**group, "members_count": (group.get("members_count") or 0) + approved_counts.get(group["id"], 0)},
                status=group_status,
                is_member=group_status == GroupStatus.APPROVED,
            ))
        return groups

    def get_group(self, session: SessionContext, group_id: str) -> GroupWithStatusResponse:
        for group in self.list_groups(session):
            if group.id == group_id:
                return group
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")

    def request_to_join(self, session: SessionContext, group_id: str) -> GroupWithStatusResponse:
        """Ask to join a group. Repeated requests leave a single pending membership."""
        if not session.is_authenticated:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Please login to join groups."
            )

        group = self.get_group(session, group_id)
        if group.status != GroupStatus.NONE:
            return group

        user_id = session.user_id
        if not join_registry.begin(user_id, group_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A join request for this group is already in progress."
            )
        try:
            self._write_pending(user_id, group_id)
        finally:
            join_registry.finish(user_id, group_id)

        return self.get_group(session, group_id)

    def enter_group(self, session: SessionContext, group_id: str) -> GroupWithStatusResponse:
        """Gate for the group feed: only approved members get through."""
        group = self.get_group(session, group_id)
        if group.status != GroupStatus.APPROVED:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=PENDING_APPROVAL_MESSAGE)
        return group

    # Administrator operations

    def list_requests(self, membership_status: MembershipStatus = MembershipStatus.PENDING) -> List[MembershipResponse]:
        """Membership rows in a status, with requester and group names. Empty when the table is missing."""
        try:
            result = self.gateway.execute(
                self.gateway.table(MEMBERSHIPS_TABLE)
                .select("*, profiles(first_name, last_name, email), community_groups(name)")
                .eq("status", membership_status.value)
                .order("created_at", desc=True),
                "List membership requests"
            )
        except GatewayError as e:
            if e.is_collection_unavailable:
                return []
            raise_http_error(e, "List membership requests")
        return [MembershipResponse(**row) for row in result.data or []]

    def list_members(self, group_id: str) -> List[MembershipResponse]:
        try:
            result = self.gateway.execute(
                self.gateway.table(MEMBERSHIPS_TABLE)
                .select("*, profiles(first_name, last_name, email)")
                .eq("group_id", group_id)
                .order("created_at", desc=True),
                "List group members"
            )
        except GatewayError as e:
            raise_http_error(e, "List group members")
        return [MembershipResponse(**row) for row in result.data or []]

    def approve(self, membership_id: str) -> MembershipResponse:
        try:
            result = self.gateway.execute(
                self.gateway.table(MEMBERSHIPS_TABLE)
                .update({"status": MembershipStatus.APPROVED.value})
                .eq("id", membership_id),
                "Approve request"
            )
        except GatewayError as e:
            raise_http_error(e, "Approve request")
        if not result.data:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Membership not found")
        logger.info(f"Approved membership {membership_id}")
        return MembershipResponse(**result.data[0])

    def decline(self, membership_id: str) -> bool:
        return self._delete(membership_id, "Decline request")

    def remove(self, membership_id: str) -> bool:
        return self._delete(membership_id, "Remove member")

    # Internals

    def _load_memberships(self, session: SessionContext) -> Tuple[List[dict], List[dict]]:
        """(caller's rows, approved rows across all groups)."""
        try:
            my_rows = []
            if session.is_authenticated:
                my_rows = self.gateway.execute(
                    self.gateway.table(MEMBERSHIPS_TABLE).select("group_id, status").eq("user_id", session.user_id),
                    "Load my memberships"
                ).data or []
            approved_rows = self.gateway.execute(
                self.gateway.table(MEMBERSHIPS_TABLE).select("group_id").eq("status", MembershipStatus.APPROVED.value),
                "Load approved memberships"
            ).data or []
            return my_rows, approved_rows
        except GatewayError as e:
            if not e.is_collection_unavailable:
                logger.error(f"Could not load memberships, showing groups without status: {e.message}")
                return [], []
            if not session.is_authenticated:
                return [], []
            logger.warning("group_memberships table unavailable, reading local fallback store")
            local = [entry.model_dump(mode="json") for entry in self.fallback_store.load(session.user_id)]
            approved = [entry.model_dump(mode="json") for entry in self.fallback_store.approved(session.user_id)]
            return local, approved

    def _write_pending(self, user_id: str, group_id: str) -> None:
        try:
            # ignore_duplicates keeps an existing row (and its status) untouched
            self.gateway.execute(
                self.gateway.table(MEMBERSHIPS_TABLE).upsert(
                    {"group_id": group_id, "user_id": user_id, "status": MembershipStatus.PENDING.value},
                    on_conflict="group_id,user_id",
                    ignore_duplicates=True
                ),
                "Join group"
            )
            logger.info(f"User {user_id} requested to join group {group_id}")
        except GatewayError as e:
            if e.is_collection_unavailable:
                logger.warning(f"group_memberships table unavailable, storing join request for {group_id} locally")
            else:
                logger.error(f"Join request for {group_id} failed ({e.kind.value}), storing locally: {e.message}")
            self.fallback_store.add_pending(user_id, group_id)

    def _delete(self, membership_id: str, context: str) -> bool:
        try:
            result = self.gateway.execute(
                self.gateway.table(MEMBERSHIPS_TABLE).delete().eq("id", membership_id),
                context
            )
        except GatewayError as e:
            raise_http_error(e, context)
        if not result.data:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Membership not found")
        logger.info(f"{context}: deleted membership {membership_id}")
        return True
