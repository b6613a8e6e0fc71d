# app/models/organization.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Organization(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    name: str
    contact_firstname: str
    contact_lastname: str
    contact_email: str
    language: str
    country: str
    created_at: Optional[datetime] = None


class DomainBinding(BaseModel):
    org_id: str
    domain: str
    is_primary: bool = False
