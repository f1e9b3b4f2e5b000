# nursery/schemas/category.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from nursery.schemas.common import ApiModel


class CategoryCreate(ApiModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    description: str | None = None
    image: str | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CategoryUpdate(ApiModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    description: str | None = None
    image: str | None = None

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        # Omit the field to keep the current name
        if v is None:
            raise ValueError("name cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CategoryRead(ApiModel):
    id: uuid.UUID = Field(alias="_id")
    name: str
    description: str | None = None
    image: str | None = None
    created_at: datetime
