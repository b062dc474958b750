"""
Errores de la aplicación.

    PetStoreError (base)
    ├── ValidationError          → 400 (id o cuerpo mal formados)
    │   └── InvalidIdentifier    → 400 (id que no es un ObjectId)
    ├── NotFound                 → 404 (ningún documento con ese id)
    └── StoreUnavailable         → 500 (Mongo no responde o la operación falló)

Los handlers registrados en main.py traducen cada clase a su código HTTP.
"""
from typing import Any, Dict, Optional


class PetStoreError(Exception):
    """Base de todos los errores propios. `context` se loguea, nunca se devuelve."""

    def __init__(self, message: str = "Error inesperado", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PetStoreError):
    def __init__(
        self,
        message: str = "Datos inválidos",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifier(ValidationError):
    def __init__(self, value: Any, field: str = "id"):
        super().__init__(
            message=f"Improperly formatted {field}: {value!r}",
            field=field,
            context={"value": value},
        )
        self.value = value


class NotFound(PetStoreError):
    def __init__(self, resource: str = "pet", resource_id: Optional[str] = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        ctx: Dict[str, Any] = {"resource": resource}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreUnavailable(PetStoreError):
    """Fallo de infraestructura del almacén; no se reintenta."""

    def __init__(
        self,
        message: str = "Document store unavailable",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation
