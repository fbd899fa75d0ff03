"""Rule Catalog.

Static table mapping each comparison rule to its severity, the kind of change
it represents and the template used to describe it. Templates may use the
``{old}``, ``{new}`` and ``{name}`` placeholders.
"""

from enum import Enum
from typing import NamedTuple

from specdiff.types import MessageType, Severity


class ComparisonRule(str, Enum):
    """Identifiers of every rule the comparator can apply."""

    ADDED_OPERATION = "AddedOperation"
    REMOVED_OPERATION = "RemovedOperation"
    MODIFIED_OPERATION_ID = "ModifiedOperationId"
    DEPRECATED_OPERATION = "DeprecatedOperation"
    CHANGED_PARAMETER_ORDER = "ChangedParameterOrder"
    REMOVED_REQUIRED_PARAMETER = "RemovedRequiredParameter"
    ADDING_REQUIRED_PARAMETER = "AddingRequiredParameter"
    ADDING_OPTIONAL_PARAMETER = "AddingOptionalParameter"
    ADDING_RESPONSE_CODE = "AddingResponseCode"
    REMOVED_RESPONSE_CODE = "RemovedResponseCode"
    LONG_RUNNING_OPERATION_EXTENSION_CHANGED = "LongRunningOperationExtensionChanged"
    ADDING_HEADER = "AddingHeader"
    REMOVING_HEADER = "RemovingHeader"
    ADDED_REQUIRED_REQUEST_BODY = "AddedRequiredRequestBody"
    ADDED_OPTIONAL_REQUEST_BODY = "AddedOptionalRequestBody"
    REMOVED_REQUEST_BODY = "RemovedRequestBody"
    REQUIRED_STATUS_CHANGE = "RequiredStatusChange"
    DEPRECATED_STATUS_CHANGE = "DeprecatedStatusChange"
    DESCRIPTION_CHANGED = "DescriptionChanged"
    ADDED_CONTENT_TYPE = "AddedContentType"
    REMOVED_CONTENT_TYPE = "RemovedContentType"
    TYPE_CHANGED = "TypeChanged"
    TYPE_FORMAT_CHANGED = "TypeFormatChanged"
    REMOVED_ENUM_VALUE = "RemovedEnumValue"
    ADDED_ENUM_VALUE = "AddedEnumValue"
    ADDED_REQUIRED_PROPERTY = "AddedRequiredProperty"
    REMOVED_REQUIRED_PROPERTY = "RemovedRequiredProperty"
    ADDED_OPTIONAL_PROPERTY = "AddedOptionalProperty"
    REMOVED_PROPERTY = "RemovedProperty"


class RuleDefinition(NamedTuple):
    severity: Severity
    kind: MessageType
    template: str


_B = Severity.BREAKING
_I = Severity.INFO
_ADD = MessageType.ADDITION
_UPD = MessageType.UPDATE
_DEL = MessageType.REMOVAL


RULES: dict[ComparisonRule, RuleDefinition] = {
    ComparisonRule.ADDED_OPERATION: RuleDefinition(
        _I, _ADD, "The new version adds the operation '{name}'."
    ),
    ComparisonRule.REMOVED_OPERATION: RuleDefinition(
        _B, _DEL, "The new version removes the operation '{name}'."
    ),
    ComparisonRule.MODIFIED_OPERATION_ID: RuleDefinition(
        _B, _UPD, "The operation id has changed from '{old}' to '{new}'."
    ),
    ComparisonRule.DEPRECATED_OPERATION: RuleDefinition(
        _I, _UPD, "The deprecated flag of the operation changed from '{old}' to '{new}'."
    ),
    ComparisonRule.CHANGED_PARAMETER_ORDER: RuleDefinition(
        _B, _UPD, "The order of parameter '{name}' was changed."
    ),
    ComparisonRule.REMOVED_REQUIRED_PARAMETER: RuleDefinition(
        _B, _DEL, "The required parameter '{name}' was removed in the new version."
    ),
    ComparisonRule.ADDING_REQUIRED_PARAMETER: RuleDefinition(
        _B, _ADD, "The required parameter '{name}' was added in the new version."
    ),
    ComparisonRule.ADDING_OPTIONAL_PARAMETER: RuleDefinition(
        _I, _ADD, "The optional parameter '{name}' was added in the new version."
    ),
    ComparisonRule.ADDING_RESPONSE_CODE: RuleDefinition(
        _B, _ADD, "The new version adds a response code '{name}'."
    ),
    ComparisonRule.REMOVED_RESPONSE_CODE: RuleDefinition(
        _B, _DEL, "The new version removes the response code '{name}'."
    ),
    ComparisonRule.LONG_RUNNING_OPERATION_EXTENSION_CHANGED: RuleDefinition(
        _B, _UPD, "The long running operation extension changed from '{old}' to '{new}'."
    ),
    ComparisonRule.ADDING_HEADER: RuleDefinition(
        _I, _ADD, "The new version adds the header '{name}'."
    ),
    ComparisonRule.REMOVING_HEADER: RuleDefinition(
        _B, _DEL, "The new version removes the header '{name}'."
    ),
    ComparisonRule.ADDED_REQUIRED_REQUEST_BODY: RuleDefinition(
        _B, _ADD, "The new version adds a required request body."
    ),
    ComparisonRule.ADDED_OPTIONAL_REQUEST_BODY: RuleDefinition(
        _I, _ADD, "The new version adds an optional request body."
    ),
    ComparisonRule.REMOVED_REQUEST_BODY: RuleDefinition(
        _B, _DEL, "The new version removes the request body."
    ),
    ComparisonRule.REQUIRED_STATUS_CHANGE: RuleDefinition(
        _B, _UPD, "The required status changed from '{old}' to '{new}'."
    ),
    ComparisonRule.DEPRECATED_STATUS_CHANGE: RuleDefinition(
        _I, _UPD, "The deprecated status changed from '{old}' to '{new}'."
    ),
    ComparisonRule.DESCRIPTION_CHANGED: RuleDefinition(
        _I, _UPD, "The description changed."
    ),
    ComparisonRule.ADDED_CONTENT_TYPE: RuleDefinition(
        _I, _ADD, "The new version adds the media type '{name}'."
    ),
    ComparisonRule.REMOVED_CONTENT_TYPE: RuleDefinition(
        _B, _DEL, "The new version removes the media type '{name}'."
    ),
    ComparisonRule.TYPE_CHANGED: RuleDefinition(
        _B, _UPD, "The new version has a different type '{new}' than the previous one '{old}'."
    ),
    ComparisonRule.TYPE_FORMAT_CHANGED: RuleDefinition(
        _B, _UPD, "The new version has a different format '{new}' than the previous one '{old}'."
    ),
    ComparisonRule.REMOVED_ENUM_VALUE: RuleDefinition(
        _B, _DEL, "The new version removes the enum value '{name}'."
    ),
    ComparisonRule.ADDED_ENUM_VALUE: RuleDefinition(
        _I, _ADD, "The new version adds the enum value '{name}'."
    ),
    ComparisonRule.ADDED_REQUIRED_PROPERTY: RuleDefinition(
        _B, _ADD, "The new version makes the property '{name}' required."
    ),
    ComparisonRule.REMOVED_REQUIRED_PROPERTY: RuleDefinition(
        _B, _DEL, "The new version no longer requires the property '{name}'."
    ),
    ComparisonRule.ADDED_OPTIONAL_PROPERTY: RuleDefinition(
        _I, _ADD, "The new version adds the optional property '{name}'."
    ),
    ComparisonRule.REMOVED_PROPERTY: RuleDefinition(
        _B, _DEL, "The new version removes the property '{name}'."
    ),
}


def get_rule(rule: ComparisonRule) -> RuleDefinition:
    """Look up the catalog entry of a rule."""
    return RULES[rule]
