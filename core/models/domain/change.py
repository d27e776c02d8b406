"""Change domain model."""

from pydantic import BaseModel, ConfigDict


class Change(BaseModel):
    """A detected difference reported by a monitor.

    The message is the short, notes-prefixed summary used as the
    notification title; details carry the longer diagnostic text.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    details: str

    def __str__(self) -> str:
        return self.message
