"""
Default values for scrape options.

Each default_* function returns the value to use for one parameter, keeping the
caller's value unless it is a zero value. apply_defaults combines them into a new
ScrapeOptions; the caller's options object is left untouched.
"""

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

from oxyjobs.contexts.payloads.options import (
    DOMAIN_COM,
    UA_DESKTOP,
    ScrapeOptions,
    is_set,
)
from oxyjobs.contexts.payloads.sources import SourceSpec

DEFAULT_START_PAGE = 1
DEFAULT_PAGES = 1
DEFAULT_LIMIT = 48


def default_domain(domain: Optional[str]) -> str:
    return domain if is_set(domain) else DOMAIN_COM


def default_start_page(start_page: Optional[int]) -> int:
    return start_page if is_set(start_page) else DEFAULT_START_PAGE


def default_pages(pages: Optional[int]) -> int:
    return pages if is_set(pages) else DEFAULT_PAGES


def default_limit(limit: Optional[int]) -> int:
    return limit if is_set(limit) else DEFAULT_LIMIT


def default_user_agent(user_agent_type: Optional[str]) -> str:
    return user_agent_type if is_set(user_agent_type) else UA_DESKTOP


def default_context(context: Mapping[str, Any], context_defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill context keys (e.g. shopping sort_by) that are missing or empty."""
    filled = dict(context)
    for key, value in context_defaults.items():
        if not is_set(filled.get(key)):
            filled[key] = value
    return filled


def apply_defaults(spec: SourceSpec, options: ScrapeOptions) -> ScrapeOptions:
    """
    Return a copy of `options` with the defaults for `spec` filled in.

    Only fields the source accepts are defaulted. When the caller paginates with
    the limit_per_page context key, start_page/pages/limit stay unset.

    Args:
        spec: Source the options are for
        options: Caller-supplied options (not modified)

    Returns:
        New ScrapeOptions with defaults applied
    """
    updates: Dict[str, Any] = {
        "user_agent_type": default_user_agent(options.user_agent_type),
        "context": default_context(options.context, spec.context_defaults),
    }

    if "domain" in spec.fields:
        updates["domain"] = default_domain(options.domain)

    if spec.paginated and options.context.get("limit_per_page") is None:
        updates["start_page"] = default_start_page(options.start_page)
        updates["pages"] = default_pages(options.pages)
        updates["limit"] = default_limit(options.limit)

    return replace(options, **updates)
