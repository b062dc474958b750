from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
import logging

from .config import get_settings
from . import db
from .exceptions import NotFound, StoreUnavailable, ValidationError
from .routers import pets

settings = get_settings()

# Configurar logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # un único cliente por proceso; se cierra al apagar
    client = db.connect(settings)
    app.state.client = client
    app.state.collection = db.get_collection(client, settings)
    logger.info("Conectado a %s.%s", settings.db_name, settings.collection_name)
    await db.ensure_indexes(app.state.collection)
    try:
        yield
    finally:
        db.close(client)
        logger.info("Conexión con Mongo cerrada")


def register_exception_handlers(app: FastAPI) -> None:
    """Traduce los errores de dominio a respuestas HTTP."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # JSON mal formado o tipos incorrectos: 400, no 422
        logger.warning("Cuerpo inválido en %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=400,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": exc.message})

    @app.exception_handler(NotFound)
    async def handle_not_found(request: Request, exc: NotFound):
        return Response(status_code=404)

    @app.exception_handler(StoreUnavailable)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailable):
        logger.error("Almacén no disponible: %s | %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"detail": "Document store unavailable. Try again later."},
        )


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.limiter = Limiter(key_func=get_remote_address)
    register_exception_handlers(app)

    # Configuración de CORS según entorno
    if settings.env == "dev":
        cors_origins = [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
        cors_regex = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"
    else:
        frontend_url = settings.frontend_base_url
        cors_origins = [frontend_url] if frontend_url else []
        cors_regex = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        expose_headers=["Content-Type"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "env": settings.env}

    app.include_router(pets.router, prefix="/api/pets", tags=["pets"])
    return app


app = create_app()
