"""
Roles and Permissions Configuration
Defines the resources of the church app, the actions available on each one,
and which roles carry which permissions. Role names match the `role` column
of the `profiles` table.
"""
from enum import Enum
from typing import Dict, List


class Role(str, Enum):
    GUEST = "GUEST"
    MEMBER = "MEMBER"
    MODERATOR = "MODERATOR"
    AUTHOR = "AUTHOR"
    ADMIN = "ADMIN"


# Define modules and their actions
MODULES = {
    "profiles": {
        "resource": "profiles",
        "actions": ["read", "update", "delete"],
        "description": "Member directory"
    },
    "blog": {
        "resource": "blog",
        "actions": ["read", "write", "delete", "comment"],
        "description": "Blog posts and categories"
    },
    "sermons": {
        "resource": "sermons",
        "actions": ["read", "write", "delete"],
        "description": "Sermon library"
    },
    "music": {
        "resource": "music",
        "actions": ["read", "write", "delete"],
        "description": "Music and podcast tracks"
    },
    "events": {
        "resource": "events",
        "actions": ["read", "write", "delete", "rsvp"],
        "description": "Events and announcements"
    },
    "groups": {
        "resource": "groups",
        "actions": ["read", "write", "delete", "join", "moderate"],
        "description": "Community groups"
    },
    "media": {
        "resource": "media",
        "actions": ["upload"],
        "description": "Image and video uploads"
    },
    "dashboard": {
        "resource": "dashboard",
        "actions": ["read"],
        "description": "Administrative overview"
    }
}

# Permissions granted per role; ADMIN receives everything
ROLE_PERMISSIONS: Dict[Role, List[str]] = {
    Role.GUEST: [
        "blog:read", "sermons:read", "music:read", "events:read", "groups:read",
    ],
    Role.MEMBER: [
        "blog:read", "blog:comment", "sermons:read", "music:read",
        "events:read", "events:rsvp", "groups:read", "groups:join",
    ],
    Role.MODERATOR: [
        "blog:read", "blog:comment", "sermons:read", "music:read",
        "events:read", "events:rsvp", "groups:read", "groups:join",
        "groups:moderate", "profiles:read",
    ],
    Role.AUTHOR: [
        "blog:read", "blog:comment", "blog:write", "blog:delete",
        "sermons:read", "music:read", "events:read", "events:rsvp",
        "groups:read", "groups:join", "media:upload",
    ],
}


def get_all_permissions() -> List[str]:
    permissions = []
    for module_config in MODULES.values():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            permissions.append(f"{resource}:{action}")
    return permissions


def get_role_permissions(role: Role) -> List[str]:
    """Permission names carried by a role."""
    if role == Role.ADMIN:
        return get_all_permissions()
    return ROLE_PERMISSIONS.get(role, [])


def role_has_permission(role: Role, permission: str) -> bool:
    return permission in get_role_permissions(role)
