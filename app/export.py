"""
Downloadable artefacts: the fixed résumé file and a standalone copy of a
rendered page, plus a structural check of the page before it is handed out.
"""
from __future__ import annotations
import logging

from bs4 import BeautifulSoup
import cssutils
import html5lib  # strict HTML5 parsing

from config import SiteConfig

logger = logging.getLogger(__name__)

# cssutils logs every unknown property at WARNING; we capture what we need
cssutils.log.setLevel(logging.CRITICAL)


def resume_bytes(config: SiteConfig) -> bytes | None:
    """Contents of the pre-placed résumé file, or None when it is not deployed."""
    path = config.site_root / config.resume_file
    if not path.is_file():
        logger.warning("Resume file %s not found", path)
        return None
    return path.read_bytes()


def page_document(page_html: str) -> str:
    """Standalone, pretty-printed copy of a rendered page (expects inlined CSS)."""
    return BeautifulSoup(page_html, "html5lib").prettify()


def validate_page(page_html: str) -> list[str]:
    """Validates HTML structure and <style> blocks. Returns a list of error messages."""
    errors = []
    try:
        html5lib.HTMLParser(strict=True).parse(page_html)
    except html5lib.html5parser.ParseError as e:
        errors.append(f"HTML ParseError: {e}")

    css_logger = cssutils.log
    soup = BeautifulSoup(page_html, "html.parser")
    for style_tag in soup.find_all("style"):
        if not style_tag.string:
            continue

        class _Capture(logging.Handler):
            def emit(self, record):
                errors.append(f"CSS Error in <style> tag: {record.getMessage()}")

        handler = _Capture()
        original_level = css_logger.getEffectiveLevel()
        css_logger.addHandler(handler)
        css_logger.setLevel(logging.ERROR)
        try:
            cssutils.CSSParser(validate=True, raiseExceptions=False).parseString(style_tag.string)
        finally:
            css_logger.removeHandler(handler)
            css_logger.setLevel(original_level)

    for message in errors:
        logger.warning(message)
    return errors
