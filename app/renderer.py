"""
Collections ➜ HTML fragments, via the Jinja templates in app/templates.

Two section layouts: a timeline (CHRONOLOGICAL) and a list of progress
bars (FLAT). Rendering only reads the records it is given.
"""
from __future__ import annotations
import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from config import SiteConfig

TEMPLATE_DIR = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(TEMPLATE_DIR), autoescape=True,
                  trim_blocks=True, lstrip_blocks=True)

MAP_CENTER = (36.947707, -3.5511425)
MAP_ZOOM = 3


class SectionKind(enum.Enum):
    CHRONOLOGICAL = "chronological"
    FLAT = "flat"


@dataclass(frozen=True)
class SectionDescriptor:
    name: str
    resource: str
    kind: SectionKind = SectionKind.CHRONOLOGICAL


def kind_for_name(section_name: str) -> SectionKind:
    """Legacy rule for sections that do not declare a kind: only an exact "Skills" is flat."""
    return SectionKind.FLAT if section_name == "Skills" else SectionKind.CHRONOLOGICAL


def _as_records(content: Any) -> Sequence[Mapping[str, Any]]:
    # anything that is not a list of records renders as an empty section
    return content if isinstance(content, (list, tuple)) else ()


def _macros():
    return env.get_template("macros.html").module


def render_item(record: Mapping[str, Any]) -> Markup:
    return _macros().item(record)


def render_skill(record: Mapping[str, Any]) -> Markup:
    return _macros().skill_item(record)


def render_section(section_name: str, content: Any, kind: Optional[SectionKind] = None) -> Markup:
    kind = kind or kind_for_name(section_name)
    return Markup(env.get_template("section.html").render(
        name=section_name,
        records=_as_records(content),
        chronological=kind is SectionKind.CHRONOLOGICAL,
    ))


def render_descriptor(descriptor: SectionDescriptor, content: Any) -> Markup:
    return render_section(descriptor.name, content, descriptor.kind)


def render_project_cards(content: Any, config: SiteConfig) -> Markup:
    return Markup(env.get_template("project_cards.html").render(
        projects=_as_records(content),
        github_logo=config.asset_url("logos", "github.svg"),
    ))


def render_map(locations: Any, center=MAP_CENTER, zoom: int = MAP_ZOOM) -> Markup:
    return Markup(env.get_template("map.html").render(
        locations=_as_records(locations), center=center, zoom=zoom,
    ))


def render_prints(prints: Iterable[Mapping[str, str]]) -> Markup:
    return Markup(env.get_template("prints.html").render(prints=list(prints)))
