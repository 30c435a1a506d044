"""
Validation of scrape targets and options.

Every check here runs before a job is submitted, so a ValidationError always means
no HTTP call was made.
"""

from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlparse

from oxyjobs.errors import ValidationError
from oxyjobs.contexts.payloads.options import (
    RENDER_MODES,
    SORT_ORDERS,
    USER_AGENTS,
    ScrapeOptions,
    is_set,
)
from oxyjobs.contexts.payloads.sources import SourceSpec

PAGINATION_FIELDS = ("limit", "start_page", "pages")


def in_list(value: Any, accepted: Iterable[Any]) -> bool:
    return value in accepted


def validate_url(url: str, host: str) -> None:
    """
    Check that `url` is absolute and points at a host containing `host`.

    Args:
        url: Target URL supplied by the caller
        host: Substring the URL host must contain (e.g. "google")

    Raises:
        ValidationError: If the URL is empty, malformed, lacks a scheme or host,
            or belongs to a different host
    """
    if not url:
        raise ValidationError("url parameter is empty")

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise ValidationError(f"failed to parse URL: {e}") from e

    if not parsed.scheme:
        raise ValidationError("URL is missing scheme")

    # hostname leaves out any user:pass@ prefix and the port
    hostname = parsed.hostname
    if not hostname:
        raise ValidationError("URL is missing a host")

    if host not in hostname:
        raise ValidationError(f"URL does not belong to {host}")


def check_pagination_conflict(options: ScrapeOptions) -> None:
    """
    Reject explicit limit/start_page/pages combined with the limit_per_page context key.

    Must run on the caller's options, before defaults fill the pagination fields.
    """
    explicit = [name for name in PAGINATION_FIELDS if is_set(getattr(options, name))]
    if explicit and options.context.get("limit_per_page") is not None:
        raise ValidationError(
            "limit, start_page and pages parameters cannot be used together "
            "with limit_per_page context parameter"
        )


def _check_positive(name: str, value: Optional[int]) -> None:
    if value is not None and value < 1:
        raise ValidationError(f"{name} must be a positive integer, got {value}")


def _check_price_range(context: Mapping[str, Any]) -> None:
    min_price = context.get("min_price")
    max_price = context.get("max_price")
    for name, price in (("min_price", min_price), ("max_price", max_price)):
        if price is None:
            continue
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValidationError(f"{name} must be a number, got {price!r}")
        if price < 0:
            raise ValidationError(f"{name} must be non-negative, got {price}")
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError("min_price cannot be greater than max_price")


def check_parameter_validity(spec: SourceSpec, options: ScrapeOptions) -> None:
    """
    Check a (defaulted) set of options against what `spec` accepts.

    Raises:
        ValidationError: On the first invalid or unsupported parameter
    """
    unsupported = [name for name in options.set_fields() if name not in spec.fields]
    if unsupported:
        raise ValidationError(
            f"{spec.name} does not accept parameter(s): {', '.join(unsupported)}"
        )

    unknown_keys = [key for key in options.context if key not in spec.context_keys]
    if unknown_keys:
        raise ValidationError(
            f"{spec.name} does not accept context key(s): {', '.join(unknown_keys)}"
        )

    if options.user_agent_type and not in_list(options.user_agent_type, USER_AGENTS):
        raise ValidationError(f"invalid user_agent_type parameter: {options.user_agent_type}")

    if options.render and not in_list(options.render, RENDER_MODES):
        raise ValidationError(f"invalid render parameter: {options.render}")

    for name in PAGINATION_FIELDS:
        _check_positive(name, getattr(options, name))

    sort_by = options.context.get("sort_by")
    if sort_by is not None and not in_list(sort_by, SORT_ORDERS):
        raise ValidationError(f"invalid sort_by context parameter: {sort_by}")

    _check_price_range(options.context)
