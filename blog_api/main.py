from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.auth import router as auth_router
from blog_api.auth import service as auth_service
from blog_api.categories import router as categories_router
from blog_api.core import db, errors
from blog_api.core.logs import configure_logging
from blog_api.core.settings import env_bool, env_list
from blog_api.posts import router as posts_router
from blog_api.subcategories import router as subcategories_router

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One DB pool per process, shared by all requests through app.state.
    app.state.pool = await db.create_pool()
    try:
        if env_bool("DB_SYNCHRONIZE", True):
            async with app.state.pool.acquire() as conn:
                await db.apply_schema(conn)
        yield
    finally:
        await app.state.pool.close()
        app.state.pool = None


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    response = await http_exception_handler(request, exc)
    auth_service.restore_refreshed_session(request, response)
    return response


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    response = JSONResponse(
        status_code=errors.ValidationError.status_code,
        content={"detail": _jsonable_errors(exc)},
    )
    auth_service.restore_refreshed_session(request, response)
    return response


def _jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))}
        for err in exc.errors()
    ]


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="blog-api", lifespan=lifespan)

    # Credentials must be allowed for the session cookie to reach the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Malformed input is a 400 here, not FastAPI's default 422.
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    # A session refreshed before the failure still reaches the client.
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(categories_router.router, tags=["categories"])
    app.include_router(subcategories_router.router, tags=["subcategories"])
    app.include_router(posts_router.router, tags=["posts"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "blog api"}

    return app


app = create_app()
