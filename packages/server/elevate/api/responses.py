"""
Mapping from structured operation results to HTTP status codes.

Ownership operations never raise past the API edge; the body is always an
``OwnershipResult`` and only the status code reflects the failure kind.
"""

from __future__ import annotations

from fastapi import HTTPException, Response

from elevate.services.ownership import OwnershipError
from elevate_shared.schemas.common import ErrorCode
from elevate_shared.schemas.ownership import OwnershipResult

STATUS_BY_ERROR: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.OPERATION_FAILED: 500,
}


def with_status(result: OwnershipResult, response: Response) -> OwnershipResult:
    if not result.success and result.error_code is not None:
        response.status_code = STATUS_BY_ERROR[result.error_code]
    return result


def as_http_error(error: OwnershipError) -> HTTPException:
    return HTTPException(status_code=STATUS_BY_ERROR[error.code], detail=str(error))
