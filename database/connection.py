"""Database connection setup for MongoDB and Redis."""
import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
import redis.asyncio as redis
from shared.config import Settings, settings as default_settings
from shared.errors import ConfigurationError

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Storage handle owned by the hosting app.

    Clients are created on first use. In development a single Mongo client is
    shared by every handle in the process, so reloads do not pile up
    connections. In production each handle owns its client and closes it.
    """

    _shared_mongo_client: Optional[AsyncIOMotorClient] = None

    def __init__(self, config: Settings = None):
        self.config = config or default_settings
        self._mongo_client: Optional[AsyncIOMotorClient] = None
        self._redis_client: Optional[redis.Redis] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    def _new_mongo_client(self) -> AsyncIOMotorClient:
        return AsyncIOMotorClient(
            self.config.mongodb_uri,
            serverSelectionTimeoutMS=self.config.mongo_server_selection_timeout_ms
        )

    def _create_mongo_client(self) -> AsyncIOMotorClient:
        if not self.config.mongodb_uri:
            raise ConfigurationError('Invalid/Missing environment variable: "MONGODB_URI"')

        if self.config.is_development:
            cls = type(self)
            if cls._shared_mongo_client is None:
                logger.info("Creating shared MongoDB client (development)")
                cls._shared_mongo_client = self._new_mongo_client()
            return cls._shared_mongo_client

        logger.info("Creating MongoDB client")
        return self._new_mongo_client()

    async def init_mongo(self) -> AsyncIOMotorDatabase:
        """Initialize MongoDB connection."""
        if self._mongo_client is None:
            client = self._create_mongo_client()
            db = client[self.config.mongo_db_name]
            try:
                await self._setup_indexes(db)
            except Exception:
                if client is not type(self)._shared_mongo_client:
                    client.close()
                raise
            self._mongo_client = client
            self._db = db
        return self._db

    async def _setup_indexes(self, db: AsyncIOMotorDatabase):
        """Set up MongoDB indexes for the blog content collection."""
        await db.blog_content.create_index("blog_url", unique=True)
        await db.blog_content.create_index("scraped_at")

    async def get_mongo_db(self) -> AsyncIOMotorDatabase:
        """Get MongoDB database instance."""
        if self._db is None:
            await self.init_mongo()
        return self._db

    async def init_redis(self) -> redis.Redis:
        """Initialize Redis connection."""
        if self._redis_client is None:
            self._redis_client = redis.from_url(
                self.config.redis_url,
                decode_responses=True
            )
        return self._redis_client

    async def get_redis(self) -> redis.Redis:
        """Get Redis client instance."""
        if self._redis_client is None:
            await self.init_redis()
        return self._redis_client

    async def ping(self) -> bool:
        """Report whether MongoDB answers."""
        try:
            db = await self.get_mongo_db()
            await db.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    async def close_connections(self):
        """Close the connections this handle owns."""
        if self._mongo_client is not None:
            if self._mongo_client is not type(self)._shared_mongo_client:
                self._mongo_client.close()
            self._mongo_client = None
            self._db = None
        if self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None


# Process-wide handle used by the page service
connection = DatabaseConnection()


async def get_redis() -> redis.Redis:
    """Dependency for getting Redis client."""
    return await connection.get_redis()
