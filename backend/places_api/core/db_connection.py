from contextlib import asynccontextmanager
from typing import AsyncIterator

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession, AsyncIOMotorDatabase
from places_api.core.config import settings
from places_api.core.logger import logs
import logging

class AsyncDBConnection:
    """
    Manages the asynchronous connection to the MongoDB database.
    The client is created on first use and shared by the whole process.
    """
    _client: AsyncIOMotorClient | None = None

    def get_client(self) -> AsyncIOMotorClient:
        if AsyncDBConnection._client is None:
            # Motor client is non-blocking
            AsyncDBConnection._client = AsyncIOMotorClient(settings.MONGO_URI)
            logs.log(logging.INFO, "MongoDB connection initialized")
        return AsyncDBConnection._client

    def get_database(self) -> AsyncIOMotorDatabase:
        """Returns the async database instance."""
        return self.get_client()[settings.MONGO_DB_NAME]

    def close(self):
        if AsyncDBConnection._client is not None:
            AsyncDBConnection._client.close()
            AsyncDBConnection._client = None
            logs.log(logging.INFO, "MongoDB connection closed")


class MongoTransactionManager:
    """
    Atomic multi-document commit over a Motor client session.
    Everything done with the yielded session is committed on clean exit
    and aborted if the block raises.
    """
    def __init__(self, client: AsyncIOMotorClient):
        self.client = client

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncIOMotorClientSession]:
        async with await self.client.start_session() as session:
            async with session.start_transaction():
                yield session


# Instantiate the connection manager
db_connection = AsyncDBConnection()

# Dependencies for FastAPI
async def get_db() -> AsyncIOMotorDatabase:
    return db_connection.get_database()

async def get_transaction_manager() -> MongoTransactionManager:
    return MongoTransactionManager(db_connection.get_client())
