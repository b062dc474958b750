from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

# campos que solo se fijan al crear; un PATCH nunca los toca
WRITE_ONCE_FIELDS = frozenset({"id", "_id", "birthdate"})

# rango de un int64 de BSON
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class PetPatch(BaseModel):
    """Lista blanca de campos mutables. Las claves desconocidas (y id/birthdate) se descartan."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    owner: Optional[str] = None
    type: Optional[str] = None
    height: Optional[int] = Field(None, ge=INT64_MIN, le=INT64_MAX)
    width: Optional[int] = Field(None, ge=INT64_MIN, le=INT64_MAX)
    favtoy: Optional[str] = None


class PetCreate(PetPatch):
    """Cuerpo del POST: name obligatorio y birthdate solo se acepta aquí."""
    name: str
    birthdate: Optional[datetime] = None

    @field_validator("birthdate")
    @classmethod
    def normalize_birthdate(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Mongo guarda las fechas en UTC sin zona y con precisión de milisegundos
        if v is None:
            return v
        if v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v.replace(microsecond=v.microsecond // 1000 * 1000)


class PetOut(PetCreate):
    id: str
    # un PATCH puede dejar name a null
    name: Optional[str] = None
