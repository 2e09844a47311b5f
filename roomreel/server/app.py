from contextlib import asynccontextmanager
from typing import Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roomreel.rewards.catalog import REWARD_CATALOG, RewardEntry
from roomreel.rewards.selector import validate_catalog
from roomreel.server.logging import log_startup_config, logger
from roomreel.server.routes import router
from roomreel.server.storage import MemoryStorage, Storage
from roomreel.utils.rng import RandomSource, get_rng
from roomreel.utils.settings import get_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_startup_config(app)
    yield


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "")})
    return errors


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    subject = "submission" if request.url.path.endswith("/submissions") else "request"
    logger.info(f"Rejected invalid {subject} on {request.url.path}")
    return JSONResponse(
        status_code=400,
        content={"message": f"Invalid {subject} data", "errors": _field_errors(exc)},
    )


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    storage: Storage | None = None,
    rng: RandomSource | None = None,
    reward_catalog: Sequence[RewardEntry] = REWARD_CATALOG,
) -> FastAPI:
    settings = get_settings()
    validate_catalog(reward_catalog)

    app = FastAPI(
        title="RoomReel Challenge API",
        version=settings.ROOMREEL_VERSION,
        lifespan=lifespan,
    )
    app.state.storage = storage if storage is not None else MemoryStorage()
    app.state.rng = rng if rng is not None else get_rng(settings.ROOMREEL_RANDOM_SEED)
    app.state.reward_catalog = tuple(reward_catalog)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ROOMREEL_CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(router, prefix=settings.ROOMREEL_API_PREFIX)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": settings.ROOMREEL_VERSION}

    return app
