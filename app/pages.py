"""
Page composition: which sections each page shows, in which order, and the
mount / unmount lifecycle of the page's view store.
"""
from __future__ import annotations
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

import requests
from markupsafe import Markup

from assets import AssetResolver, list_prints
from config import SiteConfig
from loader import ContentLoader, load_concurrently
from renderer import (SectionDescriptor, SectionKind, env, render_descriptor,
                      render_map, render_prints, render_project_cards)
from schema_content import get_collection_spec
from store import ViewModelStore

_CSS_PATH = Path(__file__).parent / "static" / "style.css"

PROFILE = {
    "name": "Carlos Morales Aguilera",
    "picture": "profile.svg",
    "phrases": [
        "Hi there, I'm Carlos!",
        "I'm working as an Odoo Developer",
        "I'm from Granada, Spain",
        "I studied Computer Engineering",
    ],
    "bio": (
        "Computer engineer and Odoo developer graduated from a Master's Degree in "
        "Computer Engineering. I consider myself as a proactive and a team player with "
        "good communication skills. Overall I have good general computing and IT "
        "knowledge that allows me to adapt to any kind of situation and learn fast."
    ),
    "github": "https://github.com/carlosma7",
    "socials": [
        ("https://github.com/carlosma7", "github.svg", "Github"),
        ("https://linkedin.com/in/carlos-morales-aguilera/", "linkedin.svg", "LinkedIn"),
        ("https://telegram.me/carlosma7", "telegram.svg", "Telegram"),
    ],
}

HOME_SECTIONS = (
    SectionDescriptor("Education", "education"),
    SectionDescriptor("Experience", "experience"),
    SectionDescriptor("Certificates", "certificates"),
    SectionDescriptor("Skills", "skills", SectionKind.FLAT),
)


@dataclass(frozen=True)
class Page:
    slug: str
    label: str
    title: str
    compose: Callable[["Page", ViewModelStore, SiteConfig], str]
    resources: Tuple[str, ...] = ()
    sections: Tuple[SectionDescriptor, ...] = ()


# ───────────────────────────────────────── page bodies ──
def _profile_context(config: SiteConfig) -> dict:
    logo = lambda name: config.asset_url("logos", name)
    return {
        "name": PROFILE["name"],
        "picture": config.static_url(f"assets/{PROFILE['picture']}"),
        "phrases": PROFILE["phrases"],
        "bio": PROFILE["bio"],
        "github": PROFILE["github"],
        "socials": [{"link": link, "logo": logo(img), "alt": alt}
                    for link, img, alt in PROFILE["socials"]],
    }


def _compose_home(page: Page, store: ViewModelStore, config: SiteConfig) -> str:
    parts = [env.get_template("home_intro.html").render(profile=_profile_context(config))]
    parts.append(Markup("\n<hr>\n").join(
        render_descriptor(section, store.get(section.resource)) for section in page.sections
    ))
    # no link to a résumé that is not deployed
    has_resume = (config.site_root / config.resume_file).is_file()
    parts.append(env.get_template("download.html").render(
        resume_href=config.static_url(config.resume_file) if has_resume else None,
        resume_name=config.resume_file,
        pdf_logo=config.asset_url("logos", "pdf.svg"),
        download_logo=config.asset_url("logos", "download.svg"),
    ))
    return "\n".join(parts)


def _compose_projects(page: Page, store: ViewModelStore, config: SiteConfig) -> str:
    intro = env.get_template("projects_intro.html").render(
        profile=_profile_context(config),
        github_logo=config.asset_url("logos", "github.svg"),
    )
    return "\n".join([intro, render_project_cards(store.get("projects"), config)])


def _compose_about_me(page: Page, store: ViewModelStore, config: SiteConfig) -> str:
    return "\n".join([render_map(store.get("locations")), render_prints(list_prints(config))])


PAGES: Dict[str, Page] = {
    page.slug: page
    for page in (
        Page("home", "Home", "Home", _compose_home,
             resources=tuple(s.resource for s in HOME_SECTIONS), sections=HOME_SECTIONS),
        Page("projects", "Projects", "Projects", _compose_projects, resources=("projects",)),
        Page("about-me", "About me", "About me", _compose_about_me, resources=("locations",)),
    )
}


def get_page(slug: str) -> Page:
    # unknown routes fall back to the home page
    return PAGES.get(slug, PAGES["home"])


# ───────────────────────────────────────── rendering ──
def _nav() -> List[dict]:
    return [{"slug": p.slug, "label": p.label} for p in PAGES.values()]


def render_page(page: Page, store: ViewModelStore, config: SiteConfig, inline_css: bool = True) -> str:
    """Full HTML document for `page` from whatever the store holds right now."""
    css_inline = _CSS_PATH.read_text(encoding="utf-8") if inline_css else ""
    return env.get_template("base.html").render(
        title=f"{PROFILE['name']} · {page.title}",
        inline_css=Markup(css_inline),
        css_href="static/style.css",
        nav=_nav(),
        current=page.slug,
        body=Markup(page.compose(page, store, config)),
        year=datetime.now().year,
        owner=PROFILE["name"],
    )


# ───────────────────────────────────────── lifecycle ──
def mount_page(page: Page, config: SiteConfig, executor: Executor,
               session: requests.Session | None = None) -> Tuple[ViewModelStore, List[Future]]:
    """Create the page's store and start loading every collection it shows."""
    store = ViewModelStore(page.resources)
    resolvers: Dict[str, AssetResolver] = {}
    loaders = []
    for resource in page.resources:
        category = get_collection_spec(resource).asset_category
        if category not in resolvers:
            resolvers[category] = AssetResolver(config, category)
        loaders.append(ContentLoader(resource, store, config,
                                     resolver=resolvers[category], session=session))
    return store, load_concurrently(loaders, executor)


def unmount_page(store: ViewModelStore, futures: Sequence[Future] = ()) -> None:
    store.close()
    for fut in futures:
        fut.cancel()
