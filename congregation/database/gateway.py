"""
Data gateway over the Supabase client.

Services build queries with the regular supabase-py builder
(``gateway.table("events").select("*").eq(...)``) and hand them to
``gateway.execute`` which runs them and turns any failure into a
``GatewayError`` carrying a ``GatewayErrorKind``. Callers branch on the kind,
never on error text.
"""
import logging
from enum import Enum
from typing import Any, Optional

from fastapi import Depends
from postgrest.exceptions import APIError
from supabase import Client

from congregation.core.security import get_current_token
from congregation.database.supabase_client import create_user_client, get_supabase

logger = logging.getLogger(__name__)


class GatewayErrorKind(str, Enum):
    COLLECTION_UNAVAILABLE = "collection_unavailable"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


# PostgREST / Postgres error codes
_CODE_KINDS = {
    "PGRST205": GatewayErrorKind.COLLECTION_UNAVAILABLE,  # table not in schema cache
    "42P01": GatewayErrorKind.COLLECTION_UNAVAILABLE,  # undefined_table
    "42501": GatewayErrorKind.UNAUTHORIZED,  # insufficient_privilege (RLS)
    "PGRST301": GatewayErrorKind.UNAUTHORIZED,  # JWT invalid
    "PGRST302": GatewayErrorKind.UNAUTHORIZED,  # anonymous access disabled
    "PGRST303": GatewayErrorKind.UNAUTHORIZED,  # JWT claims invalid
    "23505": GatewayErrorKind.CONFLICT,  # unique_violation
    "PGRST116": GatewayErrorKind.NOT_FOUND,  # .single() matched no rows
}


class GatewayError(Exception):
    def __init__(self, kind: GatewayErrorKind, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code

    @property
    def is_collection_unavailable(self) -> bool:
        return self.kind == GatewayErrorKind.COLLECTION_UNAVAILABLE


def classify_error(exc: Exception) -> GatewayErrorKind:
    """Map a client exception to a GatewayErrorKind using its error code."""
    code = getattr(exc, "code", None)
    if code is None:
        return GatewayErrorKind.UNKNOWN
    return _CODE_KINDS.get(str(code), GatewayErrorKind.UNKNOWN)


class DataGateway:
    def __init__(self, client: Client):
        self.client = client

    def table(self, name: str):
        return self.client.table(name)

    def execute(self, query, context: str = "query") -> Any:
        """Run a built query. Raises GatewayError on any failure."""
        try:
            return query.execute()
        except APIError as e:
            kind = classify_error(e)
            message = e.message or str(e)
            logger.warning(f"{context} failed ({kind.value}, code={e.code}): {message}")
            raise GatewayError(kind, message, e.code) from e
        except Exception as e:
            logger.error(f"{context} failed: {e}")
            raise GatewayError(GatewayErrorKind.UNKNOWN, str(e)) from e

    def storage(self, bucket: str):
        return self.client.storage.from_(bucket)


def get_gateway(token: Optional[str] = Depends(get_current_token)) -> DataGateway:
    """Gateway for this request: scoped to the caller's token, or the anon client for guests."""
    if token is None:
        return DataGateway(get_supabase())
    return DataGateway(create_user_client(token))
