"""
Record schemas for the JSON collections under data/.

Every model allows extra keys: a record keeps exactly the fields that were
in the file, the models only guard the shape and the handful of required
fields (skills need a label and a progress value, locations need a
coordinate pair).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, ValidationError

from errors import MalformedResource


class ContentModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    # image fields are looked up by name on every collection
    logo: Optional[str] = None
    icon: Optional[str] = None
    image: Optional[str] = None


class TimelineEntry(ContentModel):
    """education / experience / certificates"""
    item: Optional[str] = None
    title: Optional[str] = None
    institution: Optional[str] = None
    experience: Optional[str] = None
    description: Optional[str] = None
    dates: Optional[str] = None
    location: Optional[str] = None
    link: Optional[str] = None


class SkillEntry(ContentModel):
    skill: str
    progress: int          # 0–100 expected, passed through as-is


class LocationEntry(ContentModel):
    city: Optional[str] = None
    lat: float
    lng: float
    date: Optional[str] = None


class ProjectEntry(ContentModel):
    project: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    record_model: Type[ContentModel]
    asset_category: str = "logos"


COLLECTIONS: Dict[str, CollectionSpec] = {
    spec.name: spec
    for spec in (
        CollectionSpec("education", TimelineEntry),
        CollectionSpec("experience", TimelineEntry),
        CollectionSpec("certificates", TimelineEntry),
        CollectionSpec("skills", SkillEntry),
        CollectionSpec("locations", LocationEntry, asset_category="locations"),
        CollectionSpec("projects", ProjectEntry),
    )
}


def get_collection_spec(name: str) -> CollectionSpec:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise ValueError(f"Unknown collection: {name}") from None


def parse_collection(name: str, payload: Any) -> List[Dict[str, Any]]:
    """Validate a decoded JSON body and return its records as plain dicts."""
    spec = get_collection_spec(name)
    if not isinstance(payload, list):
        raise MalformedResource(name, f"expected a JSON array, got {type(payload).__name__}")

    records = []
    for idx, raw in enumerate(payload):
        if not isinstance(raw, dict):
            raise MalformedResource(name, f"record {idx} is {type(raw).__name__}, not an object")
        try:
            model = spec.record_model.model_validate(raw)
        except ValidationError as e:
            raise MalformedResource(name, f"record {idx}: {e.errors()[0]['msg']}") from e
        # only the keys present in the file survive, defaults are not injected
        dumped = model.model_dump()
        records.append({key: dumped[key] for key in raw if key in dumped})
    return records
