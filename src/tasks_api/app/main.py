from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasks_api.app.routes import tasks
from tasks_api.app.middleware.access_log import AccessLogMiddleware
from tasks_api.config import Settings, load_settings
from tasks_api.domain.errors import TaskNotFoundError, TaskValidationError
from tasks_api.infra.store.snapshot import TaskRepo
from tasks_api.infra.store.sqlite import make_sqlite_url, make_engine
from tasks_api.infra.store.task_repo_json import JsonFileTaskRepo
from tasks_api.infra.store.task_repo_sqlite import SQLiteTaskRepo
from tasks_api.services.task_service import TaskService
from tasks_api.observability.logging import setup_logging

logger = logging.getLogger("tasks_api.system")


def build_repo(settings: Settings) -> TaskRepo:
    if settings.store == "sqlite":
        engine = make_engine(make_sqlite_url(str(settings.db_path)))
        return SQLiteTaskRepo(engine)
    return JsonFileTaskRepo(settings.data_file)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _task_validation_error(request: Request, exc: TaskValidationError):
    return _error(400, exc.message)


async def _request_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return _error(400, errors[0]["msg"] if errors else "invalid request")


async def _task_not_found(request: Request, exc: TaskNotFoundError):
    return _error(404, exc.message)


async def _http_error(request: Request, exc: StarletteHTTPException):
    # unknown path or unsupported method on a known path
    if exc.status_code in (404, 405):
        return _error(404, "Not Found")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Optional[Settings] = None, repo: Optional[TaskRepo] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_dir)

    repo = repo if repo is not None else build_repo(settings)
    logger.info(
        "system.start",
        extra={"category": "system", "event": "system.start", "store": type(repo).__name__},
    )

    app = FastAPI(title="Tasks API", docs_url=None, redoc_url=None, openapi_url=None)
    app.add_middleware(AccessLogMiddleware)

    app.state.settings = settings
    app.state.task_service = TaskService(repo)

    app.add_exception_handler(TaskValidationError, _task_validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(TaskNotFoundError, _task_not_found)
    app.add_exception_handler(StarletteHTTPException, _http_error)

    app.include_router(tasks.router)

    @app.get("/", response_class=PlainTextResponse)
    def home():
        return "Tasks API up ✅"

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
