import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.config import settings
from tracker.database import IssueStore, create_store
from tracker.middleware.timing import timing_middleware
from tracker.routes import health_router, issues_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(levelname)s | %(name)s | %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: prepare the store (creates tables for the SQL backend)
    await app.state.store.start()

    yield

    # Shutdown: release connections
    await app.state.store.close()


def create_app(store: Optional[IssueStore] = None) -> FastAPI:
    app = FastAPI(title="Project Issue Tracker", lifespan=lifespan)
    app.state.store = store if store is not None else create_store(settings)

    app.middleware("http")(timing_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(issues_router)
    return app


app = create_app()
