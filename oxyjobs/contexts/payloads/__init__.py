"""
Request building domain.

Turns a scrape target plus caller options into a validated, fully-defaulted
ScrapeRequest. Pure: no network access.
"""

from oxyjobs.contexts.payloads.builder import (
    build_request,
    google_search,
    google_url,
    bing_search,
    bing_url,
    google_shopping_search,
)
from oxyjobs.contexts.payloads.defaults import apply_defaults
from oxyjobs.contexts.payloads.options import ScrapeOptions, ScrapeRequest
from oxyjobs.contexts.payloads.sources import SOURCES, SourceSpec, get_source
from oxyjobs.contexts.payloads.validation import validate_url

__all__ = [
    "build_request",
    "google_search",
    "google_url",
    "bing_search",
    "bing_url",
    "google_shopping_search",
    "apply_defaults",
    "ScrapeOptions",
    "ScrapeRequest",
    "SOURCES",
    "SourceSpec",
    "get_source",
    "validate_url",
]
