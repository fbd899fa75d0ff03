"""Comparator Package - Breaking change detection between OpenAPI documents.

Walks two parsed documents in parallel, pairing paths, methods, parameters,
responses and schemas, and records a path-addressed finding for every
difference. The walk is deterministic: the same two documents always produce
the same findings in the same order.
"""

import logging

from specdiff.types import (
    ComparisonMessage,
    ComparisonSettings,
    OpenApiDocument,
    PathItem,
)

from .context import ComparisonContext
from .operations import compare_operation
from .rules import RULES, ComparisonRule, RuleDefinition


logger = logging.getLogger("specdiff.comparator")


def compare_documents(
    old_document: OpenApiDocument,
    new_document: OpenApiDocument,
    settings: ComparisonSettings | None = None,
) -> list[ComparisonMessage]:
    """Compare two OpenAPI documents.

    This is the main entry point for the comparison engine.

    Args:
        old_document: The previously published document.
        new_document: The candidate document.
        settings: Limits for this run (defaults when omitted).

    Returns:
        Findings in emission order.

    Raises:
        ComparisonLimitExceeded: If the run exceeds its node or depth budget.
    """
    context = ComparisonContext(old_document, new_document, settings)

    with context.in_property("paths"):
        for template, new_item in new_document.paths.items():
            old_item = old_document.paths.get(template)
            with context.in_property(template):
                if old_item is None:
                    _report_operations(context, template, new_item, ComparisonRule.ADDED_OPERATION)
                else:
                    _compare_path_items(context, template, old_item, new_item)

        for template, old_item in old_document.paths.items():
            if template not in new_document.paths:
                with context.in_property(template):
                    _report_operations(context, template, old_item, ComparisonRule.REMOVED_OPERATION)

    logger.debug(
        f"Compared {context.nodes_visited} nodes, {len(context.messages)} findings"
    )
    return context.messages


def _compare_path_items(
    context: ComparisonContext,
    template: str,
    old_item: PathItem,
    new_item: PathItem,
) -> None:
    old_operations = old_item.operations()
    new_operations = new_item.operations()

    for method, new_operation in new_operations.items():
        with context.in_property(method):
            context.operation = _operation_identity(method, template)
            old_operation = old_operations.get(method)
            if old_operation is None:
                context.emit(ComparisonRule.ADDED_OPERATION, name=context.operation)
            else:
                compare_operation(
                    context,
                    old_operation,
                    new_operation,
                    old_path_parameters=old_item.parameters,
                    new_path_parameters=new_item.parameters,
                )
            context.operation = None

    for method in old_operations:
        if method not in new_operations:
            with context.in_property(method):
                context.operation = _operation_identity(method, template)
                context.emit(ComparisonRule.REMOVED_OPERATION, name=context.operation)
                context.operation = None


def _report_operations(
    context: ComparisonContext,
    template: str,
    item: PathItem,
    rule: ComparisonRule,
) -> None:
    for method in item.operations():
        with context.in_property(method):
            context.operation = _operation_identity(method, template)
            context.emit(rule, name=context.operation)
            context.operation = None


def _operation_identity(method: str, template: str) -> str:
    return f"{method.upper()} {template}"


__all__ = [
    "ComparisonContext",
    "ComparisonRule",
    "RULES",
    "RuleDefinition",
    "compare_documents",
    "compare_operation",
]
