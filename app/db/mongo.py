# app/db/mongo.py
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from app.core.config import settings

_client: Optional[AsyncIOMotorClient] = None

SIGNUPS = "signups"
ORGANIZATIONS = "organizations"
ORGANIZATION_DOMAINS = "organization_domains"
USERS = "users"

def init_client() -> None:
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.MONGO_URI)

def get_client() -> AsyncIOMotorClient:
    if _client is None:
        # not created yet, but prefer calling init_client in lifespan
        init_client()
    return _client

def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None

def get_master_db() -> AsyncIOMotorDatabase:
    client = get_client()
    return client[settings.MASTER_DB]

async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Uniqueness of domains and user emails is enforced by the database as well."""
    await db[ORGANIZATION_DOMAINS].create_index([("domain", ASCENDING)], unique=True)
    await db[ORGANIZATION_DOMAINS].create_index([("org_id", ASCENDING)])
    await db[ORGANIZATIONS].create_index([("contact_email", ASCENDING)])
    await db[SIGNUPS].create_index([("email", ASCENDING)])
    await db[SIGNUPS].create_index([("domain", ASCENDING)])
    await db[USERS].create_index([("email", ASCENDING)], unique=True)
