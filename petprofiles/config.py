from pydantic import BaseModel
import os
from urllib.parse import quote_plus
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz


def _build_mongodb_uri() -> str:
    """
    MONGODB_URI tiene prioridad; si no, se arma la URI de Atlas con
    usuario/contraseña/cluster. Sin nada configurado, Mongo local.
    """
    uri = os.getenv("MONGODB_URI")
    if uri:
        return uri
    username = os.getenv("MONGODB_USERNAME")
    password = os.getenv("MONGODB_PASSWORD")
    cluster = os.getenv("MONGODB_CLUSTER")
    if username and password and cluster:
        return (
            f"mongodb+srv://{quote_plus(username)}:{quote_plus(password)}@{cluster}"
            "/?retryWrites=true&w=majority"
        )
    return "mongodb://localhost:27017"


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "Pet Profiles")
    env: str = os.getenv("APP_ENV", "dev")
    mongodb_uri: str = _build_mongodb_uri()
    db_name: str = os.getenv("DB_NAME", "pets_profiles")
    collection_name: str = os.getenv("COLLECTION_NAME", "pets")
    store_timeout_ms: int = int(os.getenv("STORE_TIMEOUT_MS", "5000"))
    host: str = os.getenv("HOST", "localhost")
    port: int = int(os.getenv("PORT", "3000"))
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")
    write_rate_limit: str = os.getenv("WRITE_RATE_LIMIT", "60/minute")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def store_timeout(self) -> float:
        return self.store_timeout_ms / 1000


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
