"""Maps domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from nsacl.domain.exceptions import NotFound, PermissionDenied, ValidationError

logger = logging.getLogger(__name__)


async def handle_permission_denied(req, resp, ex: PermissionDenied, params) -> None:
    resp.status = falcon.HTTP_403
    resp.media = {"error": str(ex) or "Permission denied"}


async def handle_not_found(req, resp, ex: NotFound, params) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": str(ex)}


async def handle_validation_error(req, resp, ex: ValidationError, params) -> None:
    resp.status = falcon.HTTP_422
    resp.media = {"errors": ex.violations}


async def handle_unexpected(req, resp, ex: Exception, params) -> None:
    logger.exception(
        "request.unhandled", extra={"method": req.method, "path": req.path}
    )
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(PermissionDenied, handle_permission_denied)
    app.add_error_handler(NotFound, handle_not_found)
    app.add_error_handler(ValidationError, handle_validation_error)
