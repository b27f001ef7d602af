"""Data models for legislation parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, computed_field

# Lifecycle status of an act
ActStatus = Literal["in_force", "amended", "repealed", "not_yet_in_force"]

# Register API status -> ActStatus
STATUS_MAP: dict[str, ActStatus] = {
    "InForce": "in_force",
    "Ceased": "repealed",
    "Repealed": "repealed",
    "NeverEffective": "repealed",
}


class ActIndexEntry(BaseModel):
    """Descriptor for an act in the ingestion catalogue."""

    id: str = Field(..., description="Stable document id (e.g., 'privacy-act-1988')")
    title: str = Field(..., description="Display title (e.g., 'Privacy Act 1988')")
    year: int = Field(..., description="Year of the act")
    title_id: str = Field(..., description="Register title id (e.g., 'C2004A03712')")
    url: str = Field(..., description="Human-readable register URL")
    status: ActStatus = Field("in_force", description="Lifecycle status")

    model_config = ConfigDict(frozen=True)


class VersionInfo(BaseModel):
    """Version metadata reported by the register's OData API."""

    title_id: str = Field(..., alias="titleId")
    name: Optional[str] = None
    status: Optional[str] = Field(None, description="Register status (e.g., 'InForce')")
    register_id: Optional[str] = Field(None, alias="registerId")
    start: Optional[str] = Field(None, description="ISO datetime the version starts")
    retrospective_start: Optional[str] = Field(None, alias="retrospectiveStart")
    compilation_number: Optional[str] = Field(None, alias="compilationNumber")
    is_latest: bool = Field(False, alias="isLatest")
    is_current: bool = Field(False, alias="isCurrent")
    making_date: Optional[str] = Field(None, alias="makingDate")

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)


@dataclass(frozen=True)
class Heading:
    """A structural heading found in the markup."""

    css_class: str  # e.g., "ActHead5"
    level: int  # 1-8; legacy level 9 folds into 5
    text: str
    start: int
    end: int


@dataclass(frozen=True)
class SectionUnit:
    """Section heading plus the markup that follows it."""

    number: str  # e.g., "6", "2A", "476.2", "3LA"
    title: str
    body_html: str
    body_start: int
    body_end: int
    chapter: Optional[str]  # "part > division" at the heading
    position: int

    @property
    def provision_ref(self) -> str:
        return f"s{self.number}"


class Provision(BaseModel):
    """A numbered section of an act."""

    provision_ref: str = Field(..., description="Canonical reference (e.g., 's6')")
    chapter: Optional[str] = Field(None, description="Part/division context (e.g., 'Part I—Preliminary')")
    section: str = Field(..., description="Section number (e.g., '6', '476.2')")
    title: str = Field(..., description="Section title")
    content: str = Field(..., description="Section text")

    model_config = {"frozen": False}

    def __repr__(self) -> str:
        preview = self.content[:80]
        return f"Provision(ref='{self.provision_ref}', title='{self.title}', chars={len(self.content)}, preview='{preview}...')"


class Definition(BaseModel):
    """A defined term taken from an interpretation section."""

    term: str = Field(..., description="Defined term")
    definition: str = Field(..., description="Full definition text")
    source_provision: Optional[str] = Field(None, description="Provision the term was defined in")

    model_config = {"frozen": False}


class ParsedAct(BaseModel):
    """Normalized record for one act."""

    id: str
    type: Literal["statute"] = "statute"
    title: str
    title_in_source_language: str
    short_name: str
    status: ActStatus
    issued_date: str = Field(..., description="YYYY-MM-DD")
    in_force_date: str = Field(..., description="YYYY-MM-DD")
    source_url: str
    description: Optional[str] = None
    provisions: List[Provision] = Field(default_factory=list)
    definitions: List[Definition] = Field(default_factory=list)

    model_config = {"frozen": False}

    @computed_field
    @property
    def provision_count(self) -> int:
        return len(self.provisions)

    def to_dict(self) -> dict:
        """Serialize to the seed-file shape, omitting absent optional keys."""
        return self.model_dump(exclude_none=True, exclude={"provision_count"})

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def get_provision(self, section: str) -> Optional[Provision]:
        """Look up a provision by section number ('6') or reference ('s6')."""
        ref = section if section.startswith("s") else f"s{section}"
        return next((p for p in self.provisions if p.provision_ref == ref), None)

    def __repr__(self) -> str:
        return (
            f"ParsedAct(id='{self.id}', status='{self.status}', "
            f"provisions={len(self.provisions)}, definitions={len(self.definitions)})"
        )
