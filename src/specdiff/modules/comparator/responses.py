"""Response Comparator.

Describes a single response of an API operation: its headers, its own
fields and its body content.
"""

import logging

from specdiff.exceptions import InvalidComparisonArgument
from specdiff.types import DataDirection, Header, Response

from .context import ComparisonContext
from .fields import compare_common_fields
from .references import dereference
from .rules import ComparisonRule
from .schema import compare_content


logger = logging.getLogger("specdiff.comparator")


def compare_response(
    context: ComparisonContext,
    old_response: Response | None,
    new_response: Response | None,
) -> None:
    """Compare a response present under the same status code in both versions.

    Args:
        context: The comparison context, positioned on the status code.
        old_response: The original response.
        new_response: The new response.

    Raises:
        InvalidComparisonArgument: If either response is None.
    """
    if old_response is None:
        raise InvalidComparisonArgument("old_response")
    if new_response is None:
        raise InvalidComparisonArgument("new_response")

    with context.in_direction(DataDirection.RESPONSE):
        hops = context.settings.max_reference_hops
        old_response = dereference(old_response, context.old_document.components.responses, hops)
        new_response = dereference(new_response, context.new_document.components.responses, hops)
        if old_response is None or new_response is None:
            logger.debug(f"Skipping unresolvable response at {context.path}")
            return

        _compare_headers(context, old_response.headers, new_response.headers)
        compare_common_fields(context, old_response, new_response)
        compare_content(context, old_response.content, new_response.content)


def _compare_headers(
    context: ComparisonContext,
    old_headers: dict[str, Header] | None,
    new_headers: dict[str, Header] | None,
) -> None:
    old_headers = old_headers or {}
    new_headers = new_headers or {}
    if not old_headers and not new_headers:
        return

    hops = context.settings.max_reference_hops
    with context.in_property("headers"):
        for header_name, new_header in new_headers.items():
            with context.in_property(header_name):
                old_header = old_headers.get(header_name)
                if old_header is None:
                    context.emit(ComparisonRule.ADDING_HEADER, name=header_name)
                    continue

                old_header = dereference(old_header, context.old_document.components.headers, hops)
                new_header = dereference(new_header, context.new_document.components.headers, hops)
                if old_header is not None and new_header is not None:
                    compare_common_fields(context, old_header, new_header)

        for header_name in old_headers:
            if header_name not in new_headers:
                with context.in_property(header_name):
                    context.emit(ComparisonRule.REMOVING_HEADER, name=header_name)
