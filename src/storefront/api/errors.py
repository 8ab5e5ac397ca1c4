"""HTTP mapping for storefront errors.

Protean's handlers cover NotFound (404) and BadRequest (400). The two
storefront-specific categories are added on top.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.shared.errors import ForbiddenError, InternalServerError


def register_storefront_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"error": str(exc)})

    @app.exception_handler(InternalServerError)
    async def internal_server_handler(request: Request, exc: InternalServerError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc)})
