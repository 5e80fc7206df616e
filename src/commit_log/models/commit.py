"""Commit model for the in-memory commit log."""

from datetime import datetime, tzinfo
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d at %H:%M:%S %Z"


class Commit(BaseModel):
    """Represents a single commit.

    The record itself never changes once created. The link to the previous
    commit is owned by the log the commit belongs to.
    """

    id: str
    timestamp: int = Field(ge=0)  # Milliseconds since the epoch
    message: str

    model_config = {"frozen": True}

    @property
    def created_at(self) -> datetime:
        """Get the creation time as an aware datetime in the local zone."""
        return datetime.fromtimestamp(self.timestamp / 1000).astimezone()

    def format_timestamp(
        self,
        fmt: str = DEFAULT_TIMESTAMP_FORMAT,
        tz: Optional[tzinfo] = None,
    ) -> str:
        """Render the timestamp, in ``tz`` when given, else the local zone."""
        created = self.created_at if tz is None else self.created_at.astimezone(tz)
        return created.strftime(fmt)

    def describe(
        self,
        fmt: str = DEFAULT_TIMESTAMP_FORMAT,
        tz: Optional[tzinfo] = None,
    ) -> str:
        """Return ``"{id} at {timestamp}: {message}"``."""
        return f"{self.id} at {self.format_timestamp(fmt, tz)}: {self.message}"

    def __str__(self) -> str:
        return self.describe()
