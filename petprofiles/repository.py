# petprofiles/repository.py
import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

from bson import ObjectId
from pymongo.errors import PyMongoError

from .exceptions import NotFound, StoreUnavailable
from .schemas.pet import WRITE_ONCE_FIELDS
from .utils import to_object_id

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 5.0


class PetRepository:
    """
    Traduce operaciones sobre mascotas a llamadas a la colección de Mongo.

    Recibe la colección ya abierta (motor o cualquier objeto con la misma
    interfaz async). Cada llamada al almacén va con timeout; un fallo o un
    timeout se propaga como StoreUnavailable, sin reintentos.
    """

    def __init__(self, collection: Any, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self.collection = collection
        self.timeout = timeout

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, self.timeout)
        except asyncio.TimeoutError:
            logger.error("Timeout en %s tras %ss", operation, self.timeout)
            raise StoreUnavailable(f"Document store timed out during {operation}", operation=operation)
        except PyMongoError as exc:
            logger.error("Error de Mongo en %s: %s", operation, exc)
            raise StoreUnavailable(f"Document store failed during {operation}", operation=operation) from exc

    async def insert(self, pet: Dict[str, Any]) -> Dict[str, Any]:
        doc = {k: v for k, v in pet.items() if k not in ("id", "_id")}
        doc["_id"] = ObjectId()  # el id siempre se genera aquí
        await self._call("insert", self.collection.insert_one(doc))
        logger.info("Mascota creada: %s", doc["_id"])
        return doc

    async def find_all(self) -> List[Dict[str, Any]]:
        return await self._call("find_all", self.collection.find({}).to_list(None))

    async def find_by_id(self, pet_id: str) -> Dict[str, Any]:
        oid = to_object_id(pet_id)
        doc = await self._call("find_by_id", self.collection.find_one({"_id": oid}))
        if doc is None:
            raise NotFound("pet", pet_id)
        return doc

    async def find_by_type(self, pet_type: str) -> List[Dict[str, Any]]:
        # coincidencia exacta (distingue mayúsculas)
        return await self._call("find_by_type", self.collection.find({"type": pet_type}).to_list(None))

    async def update_by_id(self, pet_id: str, fields: Dict[str, Any]) -> None:
        oid = to_object_id(pet_id)
        updates = {k: v for k, v in fields.items() if k not in WRITE_ONCE_FIELDS}

        if not updates:
            # nada que aplicar, pero el id tiene que existir
            count = await self._call(
                "update_by_id", self.collection.count_documents({"_id": oid}, limit=1)
            )
            if count == 0:
                raise NotFound("pet", pet_id)
            return

        result = await self._call(
            "update_by_id", self.collection.update_one({"_id": oid}, {"$set": updates})
        )
        if result.matched_count == 0:
            raise NotFound("pet", pet_id)
        logger.info("Mascota %s actualizada: %s", pet_id, sorted(updates))

    async def delete_by_id(self, pet_id: str) -> None:
        oid = to_object_id(pet_id)
        result = await self._call("delete_by_id", self.collection.delete_one({"_id": oid}))
        if result.deleted_count == 0:
            raise NotFound("pet", pet_id)
        logger.info("Mascota eliminada: %s", pet_id)
