# app/models/user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    email: str
    password_hash: str
    org_id: str
    org_admin: bool = False
    super_admin: bool = False
    created_at: Optional[datetime] = None
