from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Envelope(BaseModel):
    """One push notification: where to apply it, how, and what to apply."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target: str
    swap_strategy: str = Field(alias="swap")
    payload: str = Field(alias="text", default="")


class LogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str


class Note(BaseModel):
    # ids end up in element ids and CSS selectors (#note-<id>)
    id: str = Field(pattern=r"^[A-Za-z0-9_-]+$")
    author: str = "anonymous"
    content: str = ""
    created_at: datetime | None = Field(alias="created-at", default=None)
    deleted: bool = False

    model_config = ConfigDict(populate_by_name=True)


def encode_pydantic_model(data: BaseModel) -> bytes:
    json_str = data.model_dump_json(by_alias=True)
    return json_str.encode("utf-8")
