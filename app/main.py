import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import attendances, auth, class_sessions, classes, health, students
from app.core.config import settings
from app.core.exceptions import AppError

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Dojo API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content=jsonable_encoder({"detail": exc.errors()}))

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(auth.router, prefix="/teacher", tags=["teachers"])
    app.include_router(students.router, prefix="/students", tags=["students"])
    app.include_router(classes.router, prefix="/classes", tags=["classes"])
    app.include_router(class_sessions.router, prefix="/class-sessions", tags=["class-sessions"])
    app.include_router(attendances.router, prefix="/attendances", tags=["attendances"])

    return app


app = create_app()
