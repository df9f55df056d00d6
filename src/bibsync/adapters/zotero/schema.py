"""Pydantic models describing the Zotero Web API v3 payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ZoteroBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class KeyInfo(ZoteroBaseModel):
    """Response of ``/keys/current``."""

    user_id: int = Field(alias="userID")
    username: str = ""


class GroupData(ZoteroBaseModel):
    id: int
    name: str = ""


class GroupPayload(ZoteroBaseModel):
    id: int
    version: int = 0
    data: GroupData


class ItemPayload(ZoteroBaseModel):
    """One entry of an items or collections listing; ``data`` is the editable record."""

    key: str
    version: int = 0
    data: dict[str, Any] = Field(default_factory=dict)

    def record(self) -> dict[str, Any]:
        record = dict(self.data)
        record.setdefault("key", self.key)
        record.setdefault("version", self.version)
        return record


class DeletedPayload(ZoteroBaseModel):
    """Response of ``/deleted``."""

    items: list[str] = Field(default_factory=list)
    collections: list[str] = Field(default_factory=list)

