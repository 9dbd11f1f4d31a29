"""Common schema primitives."""

from pydantic import BaseModel, ConfigDict


class RecordModel(BaseModel):
    """Read-only record built from ORM attributes."""

    model_config = ConfigDict(from_attributes=True, frozen=True)
