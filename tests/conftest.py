"""
Configuración de pytest para tests.

La colección de Mongo se sustituye por una colección en memoria con la misma
interfaz async que motor, inyectada a través de la dependencia
get_pet_repository.
"""
import asyncio
import copy
from types import SimpleNamespace

import bson
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from petprofiles.db import get_pet_repository
from petprofiles.repository import PetRepository


def _to_bson(doc):
    # lo mismo que hace Mongo al guardar: fechas UTC sin zona, ms, int64
    return bson.decode(bson.encode(doc))


def _matches(doc, filter_):
    return all(doc.get(k) == v for k, v in (filter_ or {}).items())


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        docs = self._docs if length is None else self._docs[:length]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    """Colección en memoria: conserva el orden de inserción y guarda los documentos como BSON."""

    def __init__(self):
        self.docs = {}

    async def insert_one(self, doc):
        if doc["_id"] in self.docs:
            raise DuplicateKeyError("duplicate _id")
        self.docs[doc["_id"]] = _to_bson(doc)
        return SimpleNamespace(inserted_id=doc["_id"], acknowledged=True)

    def find(self, filter_=None):
        return FakeCursor([d for d in self.docs.values() if _matches(d, filter_)])

    async def find_one(self, filter_):
        for d in self.docs.values():
            if _matches(d, filter_):
                return copy.deepcopy(d)
        return None

    async def update_one(self, filter_, update):
        for d in self.docs.values():
            if _matches(d, filter_):
                d.update(_to_bson(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, filter_):
        for key, d in list(self.docs.items()):
            if _matches(d, filter_):
                del self.docs[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def count_documents(self, filter_, limit=0):
        n = sum(1 for d in self.docs.values() if _matches(d, filter_))
        return min(n, limit) if limit else n


class BrokenCollection(FakeCollection):
    """Simula un Mongo inalcanzable: todas las operaciones fallan."""

    async def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")

    insert_one = _fail
    find_one = _fail
    update_one = _fail
    delete_one = _fail
    count_documents = _fail

    def find(self, filter_=None):
        return SimpleNamespace(to_list=self._fail)


class SlowCollection(FakeCollection):
    """find_one que nunca contesta a tiempo."""

    async def find_one(self, filter_):
        await asyncio.sleep(5)
        return None


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def repository(fake_collection):
    return PetRepository(fake_collection, timeout=1.0)


@pytest.fixture
def app(fake_collection):
    """App con la colección en memoria y sin rate limiting."""
    from petprofiles.main import app
    app.state.limiter = None
    app.dependency_overrides[get_pet_repository] = lambda: PetRepository(fake_collection, timeout=1.0)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Cliente de test de FastAPI (sin lifespan: no abre conexión con Mongo)"""
    return TestClient(app)


@pytest.fixture
def rex_data():
    """Datos de mascota de prueba"""
    return {
        "name": "Rex",
        "owner": "Ana",
        "type": "dog",
        "height": 40,
        "width": 20,
        "favtoy": "ball",
    }


@pytest.fixture
def broken_collection():
    return BrokenCollection()


@pytest.fixture
def slow_collection():
    return SlowCollection()
