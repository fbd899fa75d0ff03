"""Content/Schema Comparator.

Recursively compares media-type bodies and their schemas: type, format, enum
values, properties and their required status, array items and schema-valued
``additionalProperties``.

Schemas are resolved through the documents' ``components.schemas``. A schema
pair already being compared further up the stack is skipped, which is what
terminates recursion on self-referencing schemas. A pair compared in full is
not walked again in the same direction of the same operation: its differences
are reported once per operation, at the first path that reaches it.
"""

import logging
from typing import Any

from specdiff.types import MediaType, Schema

from .context import ComparisonContext
from .references import dereference, is_reference
from .rules import ComparisonRule


logger = logging.getLogger("specdiff.comparator")


def compare_content(
    context: ComparisonContext,
    old_content: dict[str, MediaType] | None,
    new_content: dict[str, MediaType] | None,
) -> None:
    """Compare two media-type maps, pairing entries by MIME type."""
    old_content = old_content or {}
    new_content = new_content or {}
    if not old_content and not new_content:
        return

    with context.in_property("content"):
        for media_type in new_content:
            if media_type not in old_content:
                with context.in_property(media_type):
                    context.emit(ComparisonRule.ADDED_CONTENT_TYPE, name=media_type)

        for media_type, old_media in old_content.items():
            with context.in_property(media_type):
                new_media = new_content.get(media_type)
                if new_media is None:
                    context.emit(ComparisonRule.REMOVED_CONTENT_TYPE, name=media_type)
                    continue

                with context.in_property("schema"):
                    compare_schema(context, old_media.schema_, new_media.schema_)


def compare_schema(
    context: ComparisonContext,
    old_schema: Schema | None,
    new_schema: Schema | None,
) -> None:
    """Compare two schemas, following references on both sides.

    Nothing is reported when either side is absent or cannot be resolved.
    """
    if old_schema is None or new_schema is None:
        return

    hops = context.settings.max_reference_hops
    old_resolved = dereference(old_schema, context.old_document.components.schemas, hops)
    new_resolved = dereference(new_schema, context.new_document.components.schemas, hops)
    if old_resolved is None or new_resolved is None:
        logger.debug(f"Skipping unresolvable schema at {context.path}")
        return

    key = (_schema_key(old_schema, old_resolved), _schema_key(new_schema, new_resolved))
    if key in context.schemas_in_progress:
        logger.debug(f"Schema cycle detected at {context.path}")
        return
    if (*key, context.direction) in context.schemas_compared:
        logger.debug(f"Schema pair already compared, skipping {context.path}")
        return

    context.visit()
    context.schemas_in_progress.add(key)
    try:
        _compare_resolved(context, old_resolved, new_resolved)
    finally:
        context.schemas_in_progress.discard(key)
    context.schemas_compared.add((*key, context.direction))


def _schema_key(original: Schema, resolved: Schema) -> Any:
    if is_reference(original.ref):
        return original.ref.strip()
    return id(resolved)


def _compare_resolved(context: ComparisonContext, old: Schema, new: Schema) -> None:
    old_type = _normalize_type(old.type)
    new_type = _normalize_type(new.type)
    if old_type is not None and new_type is not None and old_type != new_type:
        with context.in_property("type"):
            context.emit(ComparisonRule.TYPE_CHANGED, old=old_type, new=new_type)

    if old.format != new.format:
        with context.in_property("format"):
            context.emit(ComparisonRule.TYPE_FORMAT_CHANGED, old=old.format, new=new.format)

    if old.enum is not None and new.enum is not None:
        _compare_enum(context, old.enum, new.enum)

    _compare_properties(context, old, new)

    if old.items is not None or new.items is not None:
        with context.in_property("items"):
            compare_schema(context, old.items, new.items)

    if isinstance(old.additional_properties, Schema) and isinstance(
        new.additional_properties, Schema
    ):
        with context.in_property("additionalProperties"):
            compare_schema(context, old.additional_properties, new.additional_properties)


def _normalize_type(schema_type: str | list[str] | None) -> tuple[str, ...] | None:
    # "string" and ["string"] declare the same type
    if schema_type is None:
        return None
    if isinstance(schema_type, str):
        return (schema_type,)
    return tuple(sorted(schema_type))


def _compare_enum(context: ComparisonContext, old_values: list[Any], new_values: list[Any]) -> None:
    old_keys = [_enum_key(value) for value in old_values]
    new_keys = [_enum_key(value) for value in new_values]

    with context.in_property("enum"):
        for value, key in zip(old_values, old_keys):
            if key not in new_keys:
                context.emit(ComparisonRule.REMOVED_ENUM_VALUE, name=value)
        for value, key in zip(new_values, new_keys):
            if key not in old_keys:
                context.emit(ComparisonRule.ADDED_ENUM_VALUE, name=value)


def _enum_key(value: Any) -> tuple[type, Any]:
    # true == 1 in Python, not in JSON
    return type(value), value


def _compare_properties(context: ComparisonContext, old: Schema, new: Schema) -> None:
    # A name listed only under "required" still counts as a declared property
    names = list(dict.fromkeys([*old.properties, *old.required, *new.properties, *new.required]))
    if not names:
        return

    with context.in_property("properties"):
        for name in names:
            in_old = name in old.properties or name in old.required
            in_new = name in new.properties or name in new.required
            required_old = name in old.required
            required_new = name in new.required

            with context.in_property(name):
                if not in_old:
                    rule = (
                        ComparisonRule.ADDED_REQUIRED_PROPERTY
                        if required_new
                        else ComparisonRule.ADDED_OPTIONAL_PROPERTY
                    )
                    context.emit(rule, name=name)
                elif not in_new:
                    rule = (
                        ComparisonRule.REMOVED_REQUIRED_PROPERTY
                        if required_old
                        else ComparisonRule.REMOVED_PROPERTY
                    )
                    context.emit(rule, name=name)
                else:
                    if required_old and not required_new:
                        context.emit(ComparisonRule.REMOVED_REQUIRED_PROPERTY, name=name)
                    elif required_new and not required_old:
                        context.emit(ComparisonRule.ADDED_REQUIRED_PROPERTY, name=name)

                    compare_schema(context, old.properties.get(name), new.properties.get(name))
