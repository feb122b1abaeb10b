"""
Rendering service results as HTTP responses.

HTTP forbids a body on 204 and 304 responses (servers such as uvicorn's
h11 backend reject one), so those statuses are sent bare. The envelope the
service built is still logged for traceability.
"""

import logging

from fastapi import Response
from fastapi.responses import JSONResponse

from library_api.schemas import ServiceResult

logger = logging.getLogger(__name__)

BODYLESS_STATUSES = frozenset({204, 304})


def render(result: ServiceResult) -> Response:
    """Turn a ServiceResult into a JSONResponse (or a bare 204/304)."""
    if result.status_code in BODYLESS_STATUSES:
        logger.debug(f"{result.status_code}: {result.envelope.message}")
        return Response(status_code=result.status_code)
    return JSONResponse(status_code=result.status_code, content=result.envelope.to_json())
