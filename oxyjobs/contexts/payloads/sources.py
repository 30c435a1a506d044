"""
Registry of scraping sources supported by the job API.

Each source declares what kind of target it takes (a search query or a URL),
which option fields and context keys it accepts, and which defaults apply to it.
The builder and validator read this table instead of hard-coding per-source rules.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

TARGET_QUERY = "query"
TARGET_URL = "url"

# Option fields shared by every source
_COMMON_FIELDS = frozenset({"user_agent_type", "geo_location", "render", "parse", "callback_url"})
_PAGINATION_FIELDS = frozenset({"domain", "start_page", "pages", "limit"})


@dataclass(frozen=True)
class SourceSpec:
    """Static description of a single source."""

    name: str
    target: str
    fields: FrozenSet[str]
    context_keys: FrozenSet[str] = frozenset()
    host: Optional[str] = None
    context_defaults: Dict[str, object] = field(default_factory=dict)

    @property
    def takes_url(self) -> bool:
        return self.target == TARGET_URL

    @property
    def paginated(self) -> bool:
        return "start_page" in self.fields


SOURCES = {
    "google_search": SourceSpec(
        name="google_search",
        target=TARGET_QUERY,
        fields=_COMMON_FIELDS | _PAGINATION_FIELDS,
        context_keys=frozenset({
            "results_language",
            "filter",
            "limit_per_page",
            "nfpr",
            "safe_search",
            "fpstate",
            "tbm",
            "tbs",
        }),
    ),
    "google": SourceSpec(
        name="google",
        target=TARGET_URL,
        fields=_COMMON_FIELDS,
        host="google",
    ),
    "bing_search": SourceSpec(
        name="bing_search",
        target=TARGET_QUERY,
        fields=_COMMON_FIELDS | _PAGINATION_FIELDS | {"locale"},
    ),
    "bing": SourceSpec(
        name="bing",
        target=TARGET_URL,
        fields=_COMMON_FIELDS,
        host="bing",
    ),
    "google_shopping_search": SourceSpec(
        name="google_shopping_search",
        target=TARGET_QUERY,
        fields=_COMMON_FIELDS | _PAGINATION_FIELDS | {"locale"},
        context_keys=frozenset({"sort_by", "min_price", "max_price", "nfpr", "results_language"}),
        context_defaults={"sort_by": "r"},
    ),
}


def get_source(name: str) -> SourceSpec:
    """
    Look up a source by name.

    Raises:
        KeyError: If the source is not supported
    """
    if name not in SOURCES:
        raise KeyError(
            f"Source '{name}' is not supported. "
            f"Available sources: {', '.join(sorted(SOURCES))}"
        )
    return SOURCES[name]
