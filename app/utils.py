"""
Utility functions for the portfolio app.
"""
import re

_EXT_RE = re.compile(r"\.[^/.]+$")
_WORD_START = re.compile(r"\b\w")


def format_file_name(file_name: str) -> str:
    """'blue_vase.jpg' -> 'Blue Vase'"""
    stem = _EXT_RE.sub("", file_name)
    return _WORD_START.sub(lambda m: m.group().upper(), stem.replace("_", " "))
