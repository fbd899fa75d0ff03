"""Generic Field Comparator.

Compares the attributes many node kinds share: required and deprecated flags,
description, and the schema carrying type and format. Each node kind adapts
its own fields to ``CommonFields`` through ``common_fields``.
"""

from functools import singledispatch
from typing import NamedTuple

from specdiff.types import Header, Parameter, RequestBody, Response, Schema

from .context import ComparisonContext
from .rules import ComparisonRule
from .schema import compare_schema


class CommonFields(NamedTuple):
    """Shared attributes; None means the node kind has no such field."""

    required: bool | None = None
    deprecated: bool | None = None
    description: str | None = None
    schema: Schema | None = None


@singledispatch
def common_fields(node) -> CommonFields:
    raise TypeError(f"No common fields for {type(node).__name__}")


@common_fields.register
def _(node: Header) -> CommonFields:
    return CommonFields(node.required, node.deprecated, node.description, node.schema_)


@common_fields.register
def _(node: Parameter) -> CommonFields:
    return CommonFields(node.is_required, node.deprecated, node.description, node.schema_)


@common_fields.register
def _(node: Response) -> CommonFields:
    return CommonFields(description=node.description)


@common_fields.register
def _(node: RequestBody) -> CommonFields:
    return CommonFields(required=node.required, description=node.description)


def compare_common_fields(context: ComparisonContext, old_node, new_node) -> None:
    """Compare the shared attributes of two nodes of the same kind."""
    old = common_fields(old_node)
    new = common_fields(new_node)

    if old.required is not None and new.required is not None and old.required != new.required:
        with context.in_property("required"):
            context.emit(ComparisonRule.REQUIRED_STATUS_CHANGE, old=old.required, new=new.required)

    if old.deprecated is not None and new.deprecated is not None and old.deprecated != new.deprecated:
        with context.in_property("deprecated"):
            context.emit(
                ComparisonRule.DEPRECATED_STATUS_CHANGE, old=old.deprecated, new=new.deprecated
            )

    if (old.description or "") != (new.description or ""):
        with context.in_property("description"):
            context.emit(ComparisonRule.DESCRIPTION_CHANGED, old=old.description, new=new.description)

    if old.schema is not None or new.schema is not None:
        with context.in_property("schema"):
            compare_schema(context, old.schema, new.schema)
