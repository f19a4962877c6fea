from typing import List, Optional, Type
from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie, Document
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from teamdrive.configs.settings import settings
from teamdrive.utils.logging import get_logger

logger = get_logger(__name__)


class MongoDB:
    """MongoDB connection manager using Beanie ODM"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.database = None

    async def connect(self, document_models: Optional[List[Type[Document]]] = None):
        """Connect to MongoDB and initialize Beanie (creates the declared indexes)"""
        timeout_ms = int(settings.TIMEOUT_METADATA_LOOKUP * 1000)
        try:
            self.client = AsyncIOMotorClient(
                settings.MONGO_URL,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
                socketTimeoutMS=int(settings.TIMEOUT_METADATA_DELETE * 1000),
                maxPoolSize=50,
                minPoolSize=0,
                tz_aware=False,
            )

            await self.client.admin.command('ping')
            self.database = self.client[settings.MONGO_DB]

            if document_models:
                await init_beanie(
                    database=self.database,
                    document_models=document_models
                )
                logger.info(
                    f"Beanie initialized with {len(document_models)} document models on database {settings.MONGO_DB}")

            return True

        except ServerSelectionTimeoutError as e:
            logger.error(
                f"Failed to connect to MongoDB (timeout) at {settings.MONGO_HOST or 'localhost'}:{settings.MONGO_PORT}: {e}")
            raise ConnectionError("Cannot connect to MongoDB server")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {str(e)}")
            raise

    async def ping(self) -> bool:
        if not self.client:
            return False
        try:
            await self.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    async def disconnect(self):
        if self.client:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("Disconnected from MongoDB")


# Global MongoDB instance
mongodb = MongoDB()
