"""
Supabase clients.

The shared anon client only reads public data and validates tokens; it is
never signed in. Sign-in and sign-up get a fresh client of their own, and
queries made on behalf of a member run on a client scoped to that member's
access token so row-level security sees the right user.
"""
from typing import Optional

from supabase import create_client, Client

from congregation.config import settings

_anon_client: Optional[Client] = None


def create_anon_client() -> Client:
    return create_client(settings.supabase_url, settings.supabase_key)


def authorize(client: Client, access_token: str) -> Client:
    """Send the member's JWT instead of the anon key on every request of this client."""
    client.options.headers["Authorization"] = f"Bearer {access_token}"
    client.postgrest.auth(access_token)
    return client


def create_user_client(access_token: str) -> Client:
    return authorize(create_anon_client(), access_token)


def get_supabase() -> Client:
    global _anon_client
    if _anon_client is None:
        _anon_client = create_anon_client()
    return _anon_client
