# recipe_reco/db/mongo.py
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from recipe_reco.core.config import Settings, get_settings
import certifi

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None


def _new_client(settings: Settings) -> AsyncIOMotorClient:
    kwargs = {
        "uuidRepresentation": "standard",
        "serverSelectionTimeoutMS": 6000,
        "connectTimeoutMS": 6000,
    }
    if settings.MONGO_TLS:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()   # containers often lack a system CA bundle
    return AsyncIOMotorClient(settings.MONGO_URI, **kwargs)


async def connect(settings: Settings | None = None) -> AsyncIOMotorDatabase:
    """
    Create the Motor client and ping the server.
    A failed ping keeps the lazy client: the first real read retries the
    connection and, if the store is still down, fails the request.
    """
    global _client
    settings = settings or get_settings()
    if not settings.MONGO_URI:
        raise RuntimeError("MONGO_URI is not configured")

    _client = _new_client(settings)
    db = _client[settings.MONGO_DB]
    try:
        await _client.admin.command("ping")
        logger.info(f"Mongo connected db={settings.MONGO_DB} (ping ok)")
    except Exception as e:
        logger.warning(f"Mongo ping at startup failed, connecting lazily: {e}")
    return db


async def disconnect() -> None:
    global _client
    if _client:
        _client.close()
        logger.info("Mongo disconnected")
    _client = None
