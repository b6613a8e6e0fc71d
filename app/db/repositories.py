# app/db/repositories.py
"""
Mongo backed stores used by the signup flow.

Lookups return None when nothing matches and let driver errors propagate,
so callers can tell "not found" apart from "could not look".
"""
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.security import hash_password, new_confirmation_id
from app.db.mongo import ORGANIZATION_DOMAINS, ORGANIZATIONS, SIGNUPS, USERS
from app.models.organization import DomainBinding, Organization
from app.models.signup import Signup
from app.models.user import User


def _with_str_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(doc)
    doc["_id"] = str(doc["_id"])
    return doc


class SignupRepository:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.signups = db[SIGNUPS]

    async def create(self, signup: Signup) -> None:
        """Persist a pending signup and assign its confirmation id."""
        signup.id = new_confirmation_id()
        await self.signups.insert_one(signup.model_dump(by_alias=True))

    async def get_by_id(self, signup_id: str) -> Optional[Signup]:
        doc = await self.signups.find_one({"_id": signup_id})
        return Signup.model_validate(doc) if doc else None

    async def get_by_email(self, email: str) -> Optional[Signup]:
        doc = await self.signups.find_one({"email": email})
        return Signup.model_validate(doc) if doc else None

    async def get_by_domain(self, domain: str) -> Optional[Signup]:
        doc = await self.signups.find_one({"domain": domain.lower()})
        return Signup.model_validate(doc) if doc else None

    async def delete(self, signup: Signup) -> None:
        await self.signups.delete_one({"_id": signup.id})

    async def count(self) -> int:
        return await self.signups.count_documents({})


class OrganizationRepository:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.organizations = db[ORGANIZATIONS]
        self.domains = db[ORGANIZATION_DOMAINS]

    async def create(self, org: Organization) -> None:
        org.created_at = org.created_at or datetime.now()
        doc = org.model_dump(exclude={"id"})
        res = await self.organizations.insert_one(doc)
        org.id = str(res.inserted_id)

    async def add_domain(self, org: Organization, domain: str, is_primary: bool) -> None:
        binding = DomainBinding(org_id=org.id, domain=domain.lower(), is_primary=is_primary)
        doc = binding.model_dump()
        doc["org_id"] = ObjectId(binding.org_id)
        doc["created_at"] = datetime.now()
        await self.domains.insert_one(doc)

    async def get_by_email(self, email: str) -> Optional[Organization]:
        doc = await self.organizations.find_one({"contact_email": email})
        return Organization.model_validate(_with_str_id(doc)) if doc else None

    async def get_by_domain(self, domain: str) -> Optional[Organization]:
        binding = await self.domains.find_one({"domain": domain.lower()})
        if not binding:
            return None
        doc = await self.organizations.find_one({"_id": binding["org_id"]})
        return Organization.model_validate(_with_str_id(doc)) if doc else None

    async def delete(self, org: Organization) -> None:
        """Remove an organization together with all its domain bindings."""
        try:
            org_id = ObjectId(org.id)
        except (InvalidId, TypeError):
            return
        await self.domains.delete_many({"org_id": org_id})
        await self.organizations.delete_one({"_id": org_id})

    async def count(self) -> int:
        return await self.organizations.count_documents({})


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.users = db[USERS]

    @staticmethod
    def hash_password(plain_password: str) -> str:
        return hash_password(plain_password)

    async def create(self, user: User) -> None:
        user.created_at = user.created_at or datetime.now()
        doc = user.model_dump(exclude={"id"})
        doc["org_id"] = ObjectId(user.org_id)
        res = await self.users.insert_one(doc)
        user.id = str(res.inserted_id)
