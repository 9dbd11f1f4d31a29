"""Organization schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from org_directory.schemas.common import RecordModel


class CreateOrganizationOptions(BaseModel):
    """Optional descriptive fields for a new organization.

    An empty ``full_name`` falls back to the organization name.
    """

    full_name: str = Field(default="", max_length=255)
    description: str = Field(default="", max_length=255)
    website: str = Field(default="", max_length=255)
    location: str = Field(default="", max_length=255)


class ListOrganizationsOptions(BaseModel):
    """Filter for organizations an account belongs to."""

    member_id: int
    include_private_members: bool = False


class Organization(RecordModel):
    """Organization record."""

    id: int
    name: str
    full_name: str
    description: str
    website: str
    location: str
    num_members: int
    num_teams: int
    created_at: datetime
