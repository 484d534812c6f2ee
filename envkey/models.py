"""Pydantic models for rotation results."""
from enum import Enum

from pydantic import BaseModel, Field


class StorageType(str, Enum):
    """Where the rotation cursor is persisted."""

    DISK = "DISK"
    MEMORY = "MEMORY"
    DATABASE = "DATABASE"


class EnvKeyResult(BaseModel):
    """Outcome of one rotation call. Failures have an empty key."""

    key: str = ""
    index: int = Field(default=0, ge=0, description="Index that will be served next")
    message: str

    @property
    def ok(self) -> bool:
        return bool(self.key)
