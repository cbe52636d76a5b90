"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from spendscope.db.errors import QueryError
from spendscope.db.repo import DbSession
from spendscope.db.session import get_engine, get_session


def get_db_session() -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session()
    try:
        yield session
    finally:
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database before serving.

    Raises:
        ConnectivityError: If the database is unreachable; startup aborts.
    """
    get_engine()
    yield


def create_app() -> FastAPI:
    """Create FastAPI application.

    The database connection is checked when the app starts up, not when
    the factory is called.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="spendscope API",
        description="Resource inventory and spend summaries",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Include routes
    from spendscope.api.routes import executions, resources, summary

    app.include_router(executions.router, prefix="/api")
    app.include_router(summary.router, prefix="/api")
    app.include_router(resources.router, prefix="/api")

    @app.exception_handler(QueryError)
    def query_error_handler(request: Request, exc: QueryError) -> JSONResponse:
        """Report failed storage reads as server errors."""
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
