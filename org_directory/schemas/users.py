"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from org_directory.schemas.common import RecordModel


class CreateUserOptions(BaseModel):
    """Optional profile fields for a new user."""

    full_name: str = Field(default="", max_length=255)
    website: str = Field(default="", max_length=255)
    location: str = Field(default="", max_length=255)


class User(RecordModel):
    """Individual account record."""

    id: int
    name: str
    full_name: str
    email: str | None
    website: str
    location: str
    created_at: datetime
