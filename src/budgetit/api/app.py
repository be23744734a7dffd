"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from budgetit import __version__
from budgetit.api.routes import budget, project, tasks, transaction
from budgetit.database.base import Database
from budgetit.domain.errors import DomainError
from budgetit.domain.reconciliation import MirrorPolicy

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Map failures to ``{"message": ...}`` bodies.

    Every domain failure (validation, authorization, not found, conflict)
    answers 401; anything else answers 500.
    """

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"message": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": f"Invalid request: {details}"},
        )

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server error"},
        )


def create_app(db: Database, mirror_policy: MirrorPolicy = MirrorPolicy.LENIENT) -> FastAPI:
    """Build the REST app over a database.

    Routes are coroutines: requests are served one at a time on the event
    loop and share the database session.

    Args:
        db: Database instance
        mirror_policy: Behavior when a planned task has lost its live clone

    Returns:
        FastAPI application
    """
    app = FastAPI(title="budgetit", version=__version__)
    # Routes stay async def and block the loop on purpose: the one session is not thread-safe.
    app.state.db = db
    app.state.mirror_policy = mirror_policy

    register_exception_handlers(app)
    app.include_router(budget.router)
    app.include_router(tasks.router)
    app.include_router(project.router)
    app.include_router(transaction.router)
    return app
