"""Request Body Comparator."""

import logging

from specdiff.types import DataDirection, RequestBody

from .context import ComparisonContext
from .fields import compare_common_fields
from .references import dereference
from .rules import ComparisonRule
from .schema import compare_content


logger = logging.getLogger("specdiff.comparator")


def compare_request_body(
    context: ComparisonContext,
    old_body: RequestBody | None,
    new_body: RequestBody | None,
) -> None:
    """Compare the request bodies of two versions of an operation.

    Either side may be absent; absent on both sides is a no-op.
    """
    if old_body is None and new_body is None:
        return

    hops = context.settings.max_reference_hops
    with context.in_direction(DataDirection.REQUEST):
        if old_body is None:
            new_body = dereference(new_body, context.new_document.components.request_bodies, hops)
            if new_body is not None:
                rule = (
                    ComparisonRule.ADDED_REQUIRED_REQUEST_BODY
                    if new_body.required
                    else ComparisonRule.ADDED_OPTIONAL_REQUEST_BODY
                )
                context.emit(rule)
            return

        if new_body is None:
            context.emit(ComparisonRule.REMOVED_REQUEST_BODY)
            return

        old_body = dereference(old_body, context.old_document.components.request_bodies, hops)
        new_body = dereference(new_body, context.new_document.components.request_bodies, hops)
        if old_body is None or new_body is None:
            logger.debug(f"Skipping unresolvable request body at {context.path}")
            return

        compare_common_fields(context, old_body, new_body)
        compare_content(context, old_body.content, new_body.content)
