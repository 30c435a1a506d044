"""
Build validated ScrapeRequest values from a target and caller options.

The order matters: the pagination conflict check looks at what the caller
supplied, so it runs before defaults are applied; everything else is validated
on the defaulted options.
"""

from typing import Optional

from loguru import logger

from oxyjobs.errors import ValidationError
from oxyjobs.contexts.payloads.defaults import apply_defaults
from oxyjobs.contexts.payloads.options import ScrapeOptions, ScrapeRequest
from oxyjobs.contexts.payloads.sources import get_source
from oxyjobs.contexts.payloads.validation import (
    check_pagination_conflict,
    check_parameter_validity,
    validate_url,
)


def build_request(source: str, target: str, options: Optional[ScrapeOptions] = None) -> ScrapeRequest:
    """
    Validate a scrape target and options and produce the request to submit.

    Args:
        source: Source name (see sources.SOURCES)
        target: Search query for query sources, absolute URL for URL sources
        options: Caller options; None means all defaults

    Returns:
        Immutable, fully-defaulted ScrapeRequest

    Raises:
        ValidationError: If the source is unknown, the target is invalid or the
            options conflict
    """
    try:
        spec = get_source(source)
    except KeyError as e:
        raise ValidationError(e.args[0]) from e

    options = options or ScrapeOptions()

    if spec.takes_url:
        validate_url(target, spec.host)
    elif not target or not target.strip():
        raise ValidationError("query parameter is empty")

    check_pagination_conflict(options)
    defaulted = apply_defaults(spec, options)
    check_parameter_validity(spec, defaulted)

    context = tuple((key, value) for key, value in defaulted.context.items() if value is not None)

    request = ScrapeRequest(
        source=spec.name,
        query=None if spec.takes_url else target,
        url=target if spec.takes_url else None,
        domain=defaulted.domain,
        start_page=defaulted.start_page,
        pages=defaulted.pages,
        limit=defaulted.limit,
        locale=defaulted.locale,
        geo_location=defaulted.geo_location,
        user_agent_type=defaulted.user_agent_type,
        render=defaulted.render,
        parse=defaulted.parse,
        callback_url=defaulted.callback_url,
        context=context,
    )
    logger.debug(f"[{spec.name}] Built request for {request.target!r}")
    return request


def google_search(query: str, options: Optional[ScrapeOptions] = None) -> ScrapeRequest:
    return build_request("google_search", query, options)


def google_url(url: str, options: Optional[ScrapeOptions] = None) -> ScrapeRequest:
    return build_request("google", url, options)


def bing_search(query: str, options: Optional[ScrapeOptions] = None) -> ScrapeRequest:
    return build_request("bing_search", query, options)


def bing_url(url: str, options: Optional[ScrapeOptions] = None) -> ScrapeRequest:
    return build_request("bing", url, options)


def google_shopping_search(query: str, options: Optional[ScrapeOptions] = None) -> ScrapeRequest:
    return build_request("google_shopping_search", query, options)
