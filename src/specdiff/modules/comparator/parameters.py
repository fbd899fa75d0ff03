"""Parameter Comparator.

Checks that no parameters were removed or reordered, reports added ones, and
compares parameters present in both versions. Parameters are matched by
their (name, location) pair, never by position, so a renamed parameter is
one removal plus one addition.
"""

import logging
from collections.abc import Mapping, Sequence

from specdiff.types import DataDirection, Parameter, ParameterLocation

from .context import ComparisonContext
from .fields import compare_common_fields
from .references import dereference, is_reference, resolve_reference
from .rules import ComparisonRule
from .schema import compare_content


logger = logging.getLogger("specdiff.comparator")

ParameterKey = tuple[str | None, ParameterLocation | None]


def parameter_key(parameter: Parameter) -> ParameterKey:
    return parameter.name, parameter.location


def dereference_parameters(
    parameters: Sequence[Parameter],
    components: Mapping[str, Parameter],
    max_hops: int = 32,
) -> list[Parameter]:
    """Resolve every marker in a parameter list.

    Unresolvable references and parameters without a name are dropped.
    """
    resolved: list[Parameter] = []
    for parameter in parameters:
        target = dereference(parameter, components, max_hops)
        if target is None:
            logger.debug(f"Dropping unresolvable parameter reference {parameter.ref}")
            continue
        if target.name is None:
            logger.debug("Dropping parameter without a name")
            continue
        resolved.append(target)
    return resolved


def compare_parameters(
    context: ComparisonContext,
    old_parameters: Sequence[Parameter],
    new_parameters: Sequence[Parameter],
) -> None:
    """Compare two operations' parameter lists under ``parameters``."""
    hops = context.settings.max_reference_hops
    old_components = context.old_document.components.parameters
    new_components = context.new_document.components.parameters

    old_resolved = dereference_parameters(old_parameters, old_components, hops)
    new_resolved = dereference_parameters(new_parameters, new_components, hops)

    with context.in_property("parameters"):
        _compare_parameters_order(context, old_resolved, new_resolved)
        _check_parameters_removal(context, old_resolved, new_resolved, new_components)
        _check_parameters_addition(context, old_resolved, new_resolved, old_components)


def compare_parameter(
    context: ComparisonContext,
    old_parameter: Parameter,
    new_parameter: Parameter,
) -> None:
    """Compare one parameter present in both versions."""
    with context.in_direction(DataDirection.REQUEST):
        compare_common_fields(context, old_parameter, new_parameter)
        compare_content(context, old_parameter.content, new_parameter.content)


def _compare_parameters_order(
    context: ComparisonContext,
    old_parameters: list[Parameter],
    new_parameters: list[Parameter],
) -> None:
    for index, new_parameter in enumerate(new_parameters):
        # path parameters bind by name in the URL template, not by position
        if new_parameter.location == ParameterLocation.PATH:
            continue

        prior_index = _find_parameter_index(new_parameter, old_parameters)
        if prior_index != -1 and prior_index != index:
            with context.in_named_item(new_parameter.name):
                context.emit(
                    ComparisonRule.CHANGED_PARAMETER_ORDER,
                    old=prior_index,
                    new=index,
                    name=new_parameter.name,
                )


def _check_parameters_removal(
    context: ComparisonContext,
    old_parameters: list[Parameter],
    new_parameters: list[Parameter],
    new_components: Mapping[str, Parameter],
) -> None:
    for old_parameter in old_parameters:
        new_parameter = _find_parameter(old_parameter, new_parameters, new_components)

        with context.in_named_item(old_parameter.name):
            if new_parameter is not None:
                compare_parameter(context, old_parameter, new_parameter)
            elif old_parameter.is_required:
                context.emit(ComparisonRule.REMOVED_REQUIRED_PARAMETER, name=old_parameter.name)


def _check_parameters_addition(
    context: ComparisonContext,
    old_parameters: list[Parameter],
    new_parameters: list[Parameter],
    old_components: Mapping[str, Parameter],
) -> None:
    for new_parameter in new_parameters:
        if _find_parameter(new_parameter, old_parameters, old_components) is not None:
            continue

        rule = (
            ComparisonRule.ADDING_REQUIRED_PARAMETER
            if new_parameter.is_required
            else ComparisonRule.ADDING_OPTIONAL_PARAMETER
        )
        with context.in_named_item(new_parameter.name):
            context.emit(rule, name=new_parameter.name)


def _find_parameter_index(parameter: Parameter, parameters: list[Parameter]) -> int:
    key = parameter_key(parameter)
    for index, candidate in enumerate(parameters):
        if parameter_key(candidate) == key:
            return index
    return -1


def _find_parameter(
    parameter: Parameter,
    parameters: Sequence[Parameter],
    components: Mapping[str, Parameter],
) -> Parameter | None:
    """Find the counterpart of ``parameter`` in a list.

    Entries that are still reference markers are looked up in the document's
    global parameter components.
    """
    key = parameter_key(parameter)
    for candidate in parameters:
        if is_reference(candidate.ref):
            candidate = resolve_reference(candidate.ref, components, "parameters")
            if candidate is None:
                continue
        if parameter_key(candidate) == key:
            return candidate
    return None
