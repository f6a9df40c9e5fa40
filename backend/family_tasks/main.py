import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from family_tasks.core import database
from family_tasks.core.config import settings
from family_tasks.core.errors import FamilyTasksError
from family_tasks.core.logging_setup import setup_logging
from family_tasks.core.rpc import ProcedureRouter, build_rpc_router
from family_tasks.routers import categories, family_members, system, tasks

logger = logging.getLogger(__name__)


def build_procedures() -> ProcedureRouter:
    procedures = ProcedureRouter()
    procedures.include_router(system.router)
    procedures.include_router(family_members.router)
    procedures.include_router(categories.router)
    procedures.include_router(tasks.router)
    return procedures


def create_app(engine: Optional[AsyncEngine] = None, configure_logging: bool = True) -> FastAPI:
    engine = engine or database.engine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logging:
            setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
        await database.init_db(engine)
        logger.info("Family Tasks API ready, procedures: %s", len(app.state.procedures.procedures))
        yield
        await engine.dispose()

    app = FastAPI(title="Family Tasks API", lifespan=lifespan)
    app.state.session_factory = database.make_sessionmaker(engine)
    app.state.procedures = build_procedures()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(build_rpc_router(app.state.procedures))

    @app.exception_handler(FamilyTasksError)
    async def family_tasks_error_handler(request: Request, exc: FamilyTasksError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        else:
            logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})

    @app.get("/")
    async def root():
        return {"message": "Family Tasks API is running"}

    return app


app = create_app()


def run():
    uvicorn.run("family_tasks.main:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
