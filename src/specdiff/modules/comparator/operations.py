"""Operation Comparator.

Describes a single API operation on a path: its identifier, parameters,
responses, request body and lifecycle extension.
"""

from collections.abc import Mapping, Sequence

from specdiff.exceptions import InvalidComparisonArgument
from specdiff.types import Operation, Parameter, Response

from .context import ComparisonContext
from .parameters import compare_parameters, dereference_parameters, parameter_key
from .request_body import compare_request_body
from .responses import compare_response
from .rules import ComparisonRule


LONG_RUNNING_OPERATION_EXTENSION = "x-ms-long-running-operation"


def compare_operation(
    context: ComparisonContext,
    old_operation: Operation | None,
    new_operation: Operation | None,
    *,
    old_path_parameters: Sequence[Parameter] = (),
    new_path_parameters: Sequence[Parameter] = (),
) -> None:
    """Compare two versions of an operation and record every difference.

    Args:
        context: The comparison context, positioned on the operation.
        old_operation: The original operation.
        new_operation: The new operation.
        old_path_parameters: Parameters declared on the old path item.
        new_path_parameters: Parameters declared on the new path item.

    Raises:
        InvalidComparisonArgument: If either operation is None.
    """
    if old_operation is None:
        raise InvalidComparisonArgument("old_operation")
    if new_operation is None:
        raise InvalidComparisonArgument("new_operation")

    context.visit()
    context.schemas_compared.clear()

    if new_operation.operation_id != old_operation.operation_id:
        with context.in_property("operationId"):
            context.emit(
                ComparisonRule.MODIFIED_OPERATION_ID,
                old=old_operation.operation_id,
                new=new_operation.operation_id,
            )

    hops = context.settings.max_reference_hops
    compare_parameters(
        context,
        effective_parameters(
            old_path_parameters,
            old_operation.parameters,
            context.old_document.components.parameters,
            hops,
        ),
        effective_parameters(
            new_path_parameters,
            new_operation.parameters,
            context.new_document.components.parameters,
            hops,
        ),
    )

    compare_responses(context, old_operation.responses, new_operation.responses)

    with context.in_property("requestBody"):
        compare_request_body(context, old_operation.request_body, new_operation.request_body)

    _compare_extensions(context, old_operation.extensions, new_operation.extensions)

    if old_operation.deprecated != new_operation.deprecated:
        with context.in_property("deprecated"):
            context.emit(
                ComparisonRule.DEPRECATED_OPERATION,
                old=old_operation.deprecated,
                new=new_operation.deprecated,
            )


def effective_parameters(
    path_parameters: Sequence[Parameter],
    operation_parameters: Sequence[Parameter],
    components: Mapping[str, Parameter],
    max_hops: int = 32,
) -> list[Parameter]:
    """Merge path-level parameters into an operation's own list.

    Both lists are resolved first, so an operation parameter overrides a
    path-level one with the same (name, location) whichever side of the pair
    is declared through a reference.
    """
    inherited = dereference_parameters(path_parameters, components, max_hops)
    declared = dereference_parameters(operation_parameters, components, max_hops)

    overridden = {parameter_key(p) for p in declared}
    inherited = [p for p in inherited if parameter_key(p) not in overridden]
    return [*inherited, *declared]


def compare_responses(
    context: ComparisonContext,
    old_responses: dict[str, Response] | None,
    new_responses: dict[str, Response] | None,
) -> None:
    """Compare status-code sets, then each response present in both."""
    if old_responses is None or new_responses is None:
        return

    with context.in_property("responses"):
        for status_code in new_responses:
            if status_code not in old_responses:
                with context.in_property(status_code):
                    context.emit(ComparisonRule.ADDING_RESPONSE_CODE, name=status_code)

        for status_code in old_responses:
            if status_code not in new_responses:
                with context.in_property(status_code):
                    context.emit(ComparisonRule.REMOVED_RESPONSE_CODE, name=status_code)

        for status_code, old_response in old_responses.items():
            if status_code in new_responses:
                with context.in_property(status_code):
                    compare_response(context, old_response, new_responses[status_code])


def _compare_extensions(
    context: ComparisonContext,
    old_extensions: dict,
    new_extensions: dict,
) -> None:
    old_value = old_extensions.get(LONG_RUNNING_OPERATION_EXTENSION)
    new_value = new_extensions.get(LONG_RUNNING_OPERATION_EXTENSION)

    # parsed values are compared structurally, not by identity
    if old_value == new_value:
        return

    with context.in_property(LONG_RUNNING_OPERATION_EXTENSION):
        context.emit(
            ComparisonRule.LONG_RUNNING_OPERATION_EXTENSION_CHANGED,
            old=old_value,
            new=new_value,
        )
