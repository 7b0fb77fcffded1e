from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Party:
    """A person or organisation that owns cases"""
    id: Optional[int] = None
    type: str = "person"  # 'person' or 'organisation'
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    about: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class Track:
    """A workflow template that may be applied to a case when it is created"""
    id: Optional[int] = None
    description: Optional[str] = None
    capture_rule: Optional[str] = None  # 'KASE' or 'OPPORTUNITY'


@dataclass
class Task:
    """A task attached to a case"""
    id: Optional[int] = None
    description: Optional[str] = None
    detail: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[date] = None
    owner: Optional[str] = None
    case_id: Optional[int] = None
    party_id: Optional[int] = None
