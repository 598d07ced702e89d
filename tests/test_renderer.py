import pytest
from bs4 import BeautifulSoup

from renderer import (SectionDescriptor, SectionKind, kind_for_name, render_descriptor, render_item,
                      render_map, render_prints, render_project_cards, render_section)
from store import freeze

FIELD_ELEMENTS = {
    "logo": "logo",
    "item": "title",
    "experience": "description",
    "link": "link",
    "location": "location",
}

FULL_RECORD = {
    "logo": "http://site.test/assets/logos/ugr.svg",
    "item": "MSc Computer Engineering",
    "experience": "University of Granada",
    "link": "https://example.org/cert",
    "location": "Granada, Spain",
}


def soup(markup):
    return BeautifulSoup(str(markup), "html.parser")


def rendered_fields(markup):
    return {el["data-field"] for el in soup(markup).select("[data-field]")}


@pytest.mark.parametrize("present", [
    (),
    ("logo",),
    ("item", "location"),
    ("experience", "link"),
    ("logo", "item", "experience", "link", "location"),
])
def test_item_shows_exactly_the_present_fields(present):
    record = {key: FULL_RECORD[key] for key in present}
    assert rendered_fields(render_item(record)) == {FIELD_ELEMENTS[key] for key in present}


def test_item_accepts_title_and_institution_aliases():
    html = soup(render_item({"title": "BSc", "institution": "UGR"}))
    assert html.select_one(".item-content").text == "BSc"
    assert html.select_one(".experience").text == "UGR"


def test_empty_values_render_nothing():
    assert rendered_fields(render_item({"logo": "", "item": None, "link": ""})) == set()


def test_link_opens_externally():
    link = soup(render_item({"link": "https://example.org"})).select_one("a")
    assert link["href"] == "https://example.org"
    assert link["target"] == "_blank"
    assert link["rel"] == ["noopener", "noreferrer"]


def test_text_is_escaped():
    html = str(render_item({"item": "<script>alert(1)</script>"}))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.parametrize("name,kind", [
    ("Skills", SectionKind.FLAT),
    ("skills", SectionKind.CHRONOLOGICAL),
    ("SKILLS", SectionKind.CHRONOLOGICAL),
    ("Skills ", SectionKind.CHRONOLOGICAL),
    ("Education", SectionKind.CHRONOLOGICAL),
    ("", SectionKind.CHRONOLOGICAL),
])
def test_only_exact_skills_name_is_flat(name, kind):
    assert kind_for_name(name) is kind


def test_declared_kind_wins_over_name():
    records = [{"skill": "Go", "progress": 80}]
    html = soup(render_descriptor(SectionDescriptor("Languages", "skills", SectionKind.FLAT), records))
    assert html.select(".custom-progress-bar")
    assert not html.select(".timeline")


def test_chronological_keeps_source_order_and_connectors():
    records = [
        {"item": "Third", "dates": "2010"},
        {"item": "First", "dates": "2024"},
        {"item": "Second"},
    ]
    html = soup(render_section("Education", records))
    items = html.select(".timeline-item")

    assert [i.select_one(".item-content").text for i in items] == ["Third", "First", "Second"]
    assert [bool(i.select(".timeline-connector")) for i in items] == [True, True, False]
    assert items[0].select_one(".timeline-opposite").text.strip() == "2010"
    assert items[2].select_one(".timeline-opposite").text.strip() == ""


def test_flat_round_trip_for_single_skill():
    html = soup(render_section("Skills", [{"skill": "Go", "progress": 80}]))
    assert html.select_one(".skill").text == "Go"
    bar = html.select_one(".progress-bar")
    assert bar["aria-valuenow"] == "80"
    assert "width: 80%" in bar["style"]


def test_out_of_range_progress_is_passed_through():
    bar = soup(render_section("Skills", [{"skill": "Go", "progress": 150}])).select_one(".progress-bar")
    assert bar["aria-valuenow"] == "150"


@pytest.mark.parametrize("content", [[], (), None, {"item": "not a list"}, "text"])
def test_empty_or_invalid_content_keeps_the_label(content):
    html = soup(render_section("Experience", content))
    assert html.select_one(".section-name").text.strip() == "Experience"
    assert html.select(".timeline-item") == []


def test_rendering_is_idempotent_and_does_not_mutate():
    records = freeze([{"item": "A", "dates": "2020"}, {"item": "B"}])
    before = [dict(r) for r in records]
    first = render_section("Education", records)
    second = render_section("Education", records)
    assert first == second
    assert [dict(r) for r in records] == before


def test_map_marker_keeps_exact_coordinates():
    html = soup(render_map([{"city": "Granada", "lat": 36.95, "lng": -3.55, "date": "2023"}]))
    (marker,) = html.select(".map-marker")
    assert (marker["data-lat"], marker["data-lng"]) == ("36.95", "-3.55")
    assert marker.select_one(".marker-city").text == "Granada"
    canvas = html.select_one("#travel-map")
    assert canvas["data-center-lat"] == "36.947707"
    assert canvas["data-zoom"] == "3"


def test_project_cards(site_config):
    projects = [
        {"project": "Bot", "description": "A bot", "link": "https://example.org/bot", "icon": "i.svg"},
        {"project": "Site"},
    ]
    cards = soup(render_project_cards(projects, site_config)).select(".card")
    assert [c.select_one(".card-title").text for c in cards] == ["Bot", "Site"]
    assert cards[0].select_one("a")["href"] == "https://example.org/bot"
    assert cards[1].select_one("a") is None


def test_prints_carousel():
    html = soup(render_prints([{"src": "/a.jpg", "name": "Blue Vase"}]))
    assert html.select_one(".h3-overlay").text == "Blue Vase"
    assert html.select_one("img")["alt"] == "Blue Vase"
