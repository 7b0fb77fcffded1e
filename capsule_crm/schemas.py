from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import date
from typing import Optional


def _date_part(value):
    # Capsule sends dates as full timestamps, e.g. 2013-05-01T00:00:00Z
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


class WireModel(BaseModel):
    """Base for CapsuleCRM JSON payloads (camelCase on the wire)"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CaseSchema(WireModel):
    """Schema for the body of a kase"""
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = Field(None, description="OPEN or CLOSED")
    close_date: Optional[date] = Field(
        None,
        description="Ignored by Capsule unless status is CLOSED"
    )
    owner: Optional[str] = Field(None, description="Username of the owner")
    party_id: Optional[int] = None
    track_id: Optional[int] = None

    @field_validator("close_date", mode="before")
    @classmethod
    def _trim_close_date(cls, value):
        return _date_part(value)


class PartySchema(WireModel):
    """Schema for a person or organisation"""
    id: int
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    about: Optional[str] = None


class TrackSchema(WireModel):
    """Schema for a track (workflow template)"""
    id: int
    description: Optional[str] = None
    capture_rule: Optional[str] = None


class TaskSchema(WireModel):
    """Schema for a task"""
    id: int
    description: Optional[str] = None
    detail: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[date] = None
    owner: Optional[str] = None
    case_id: Optional[int] = None
    party_id: Optional[int] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _trim_due_date(cls, value):
        return _date_part(value)


class TagSchema(WireModel):
    """Schema for a tag"""
    name: str


def collection_items(payload: dict, collection_root: str, root: str) -> list:
    """
    Pull the item list out of a Capsule collection envelope

    Capsule wraps collections as {"kases": {"kase": [...]}}. A collection
    of one arrives as a bare object and an empty one may have no inner key
    at all.
    """
    wrapper = payload.get(collection_root) or {}
    items = wrapper.get(root, []) if isinstance(wrapper, dict) else wrapper
    if isinstance(items, dict):
        return [items]
    return list(items or [])
