"""
Option and request values for scrape jobs.

ScrapeOptions is what callers fill in (every field optional). ScrapeRequest is the
fully-defaulted, validated value the builder produces and the job client submits.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

# Accepted user agent classes
UA_DESKTOP = "desktop"
USER_AGENTS = [
    UA_DESKTOP,
    "desktop_chrome",
    "desktop_edge",
    "desktop_firefox",
    "desktop_opera",
    "desktop_safari",
    "mobile",
    "mobile_android",
    "mobile_ios",
    "tablet",
    "tablet_android",
    "tablet_ios",
]

RENDER_HTML = "html"
RENDER_PNG = "png"
RENDER_MODES = [RENDER_HTML, RENDER_PNG]

# Shopping sort orders: relevance, review score, price ascending, price descending
SORT_RELEVANCE = "r"
SORT_ORDERS = [SORT_RELEVANCE, "rv", "p", "pd"]

DOMAIN_COM = "com"


@dataclass(frozen=True)
class ScrapeOptions:
    """Caller-supplied options. Unset fields are None and get defaulted per source."""

    domain: Optional[str] = None
    start_page: Optional[int] = None
    pages: Optional[int] = None
    limit: Optional[int] = None
    locale: Optional[str] = None
    geo_location: Optional[str] = None
    user_agent_type: Optional[str] = None
    render: Optional[str] = None
    parse: bool = False
    callback_url: Optional[str] = None
    context: Mapping[str, Any] = field(default_factory=dict)

    def set_fields(self) -> List[str]:
        """Names of top-level option fields holding a non-zero value."""
        return [
            f.name
            for f in fields(self)
            if f.name != "context" and is_set(getattr(self, f.name))
        ]


def is_set(value: Any) -> bool:
    """Zero values (None, 0, "", False, empty containers) count as unset."""
    return bool(value)


@dataclass(frozen=True)
class ScrapeRequest:
    """Immutable description of one scrape job, ready to be serialised."""

    source: str
    query: Optional[str] = None
    url: Optional[str] = None
    domain: Optional[str] = None
    start_page: Optional[int] = None
    pages: Optional[int] = None
    limit: Optional[int] = None
    locale: Optional[str] = None
    geo_location: Optional[str] = None
    user_agent_type: Optional[str] = None
    render: Optional[str] = None
    parse: bool = False
    callback_url: Optional[str] = None
    context: Tuple[Tuple[str, Any], ...] = ()

    @property
    def target(self) -> str:
        return self.query if self.query is not None else self.url

    def to_payload(self) -> Dict[str, Any]:
        """
        Serialise to the JSON body expected by the job-creation endpoint.

        Unset optional fields are left out. `parse` is always sent.
        Context entries become a list of {"key", "value"} objects.
        """
        payload: Dict[str, Any] = {"source": self.source}
        for f in fields(self):
            if f.name in ("source", "context"):
                continue
            value = getattr(self, f.name)
            if f.name == "parse" or value is not None:
                payload[f.name] = value

        if self.context:
            payload["context"] = [{"key": key, "value": value} for key, value in self.context]
        return payload
