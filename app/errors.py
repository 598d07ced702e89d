"""
Failure conditions of the content pipeline.
"""


class ContentError(Exception):
    """Base class for everything that can go wrong while loading a collection."""


class ResourceUnavailable(ContentError):
    """The JSON resource could not be fetched (network error or non-2xx status)."""

    def __init__(self, resource: str, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(f"{resource}: {reason}")


class MalformedResource(ContentError):
    """The response body is not a JSON array of well-formed records."""

    def __init__(self, resource: str, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(f"{resource}: {reason}")


class AssetUnresolvable(ContentError):
    """A record names an image that is not present in its asset directory."""

    def __init__(self, category: str, filename: str):
        self.category = category
        self.filename = filename
        super().__init__(f"{filename!r} not found in {category} assets")
