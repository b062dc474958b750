# petprofiles/utils.py
from typing import Any, Dict, Optional
from bson import ObjectId

from .exceptions import InvalidIdentifier


def to_out(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convierte _id -> id (str) para la representación externa.
    Si doc es None, devuelve {}.
    """
    if doc is None:
        return {}
    d = dict(doc)
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    return d


def to_object_id(value: str, field_name: str = "id") -> ObjectId:
    """
    Convierte un string a ObjectId con validación.
    Un id mal formado es InvalidIdentifier (400), nunca NotFound.
    """
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdentifier(value, field=field_name)
    return ObjectId(value)
