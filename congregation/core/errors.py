from fastapi import HTTPException

from congregation.database.gateway import GatewayError, GatewayErrorKind

_STATUS_BY_KIND = {
    GatewayErrorKind.COLLECTION_UNAVAILABLE: 503,
    GatewayErrorKind.UNAUTHORIZED: 403,
    GatewayErrorKind.CONFLICT: 409,
    GatewayErrorKind.NOT_FOUND: 404,
    GatewayErrorKind.UNKNOWN: 500,
}


def to_http_error(error: GatewayError, context: str) -> HTTPException:
    """Convert a gateway failure into the HTTP error shown to the caller."""
    if error.kind == GatewayErrorKind.COLLECTION_UNAVAILABLE:
        detail = f"{context} failed: table missing, the database schema has not been provisioned"
    else:
        detail = f"{context} failed: {error.message}"
    return HTTPException(status_code=_STATUS_BY_KIND[error.kind], detail=detail)


def raise_http_error(error: GatewayError, context: str):
    raise to_http_error(error, context) from error
