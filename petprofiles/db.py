import logging
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from .config import Settings, get_settings
from .repository import PetRepository

logger = logging.getLogger(__name__)


def connect(settings: Settings) -> AsyncIOMotorClient:
    """Crea el cliente de Mongo (una vez por proceso). No hace I/O hasta la primera operación."""
    return AsyncIOMotorClient(
        settings.mongodb_uri,
        timeoutMS=settings.store_timeout_ms,
        serverSelectionTimeoutMS=settings.store_timeout_ms,
    )


def get_collection(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorCollection:
    return client[settings.db_name][settings.collection_name]


async def ensure_indexes(collection: AsyncIOMotorCollection) -> None:
    # índice para GET /types/{type}; si Mongo no responde solo se avisa
    try:
        await collection.create_index([("type", 1)])
    except PyMongoError as exc:
        logger.warning("No se pudo crear el índice de 'type': %s", exc)


def close(client: AsyncIOMotorClient | None) -> None:
    if client is not None:
        client.close()


async def get_pet_repository(request: Request) -> PetRepository:
    """Dependencia de FastAPI: repositorio sobre la colección abierta en el lifespan."""
    settings = get_settings()
    return PetRepository(request.app.state.collection, timeout=settings.store_timeout)
