"""Unit tests for the traversal context, rule catalog and reference resolver."""

import pytest

from specdiff.exceptions import ComparisonLimitExceeded
from specdiff.modules.comparator.context import (
    ComparisonContext,
    escape_segment,
    summarize_value,
)
from specdiff.modules.comparator.references import (
    dereference,
    is_reference,
    reference_name,
    resolve_reference,
)
from specdiff.modules.comparator.rules import RULES, ComparisonRule
from specdiff.types import (
    ComparisonSettings,
    DataDirection,
    MessageType,
    OpenApiDocument,
    Parameter,
    Severity,
)


@pytest.fixture
def context():
    document = OpenApiDocument(openapi="3.0.3")
    return ComparisonContext(document, document)


class TestPathStack:
    """Tests for path segment handling."""

    def test_segments_are_pointer_escaped(self):
        assert escape_segment("/widgets/{id}") == "~1widgets~1{id}"
        assert escape_segment("a~b") == "a~0b"
        assert escape_segment(200) == "200"

    def test_push_and_pop(self, context):
        context.push_property("paths")
        context.push_property("/widgets")
        context.push_property("get")
        context.push_named_item("id")

        assert context.path == "/paths/~1widgets/get/id"
        assert context.pop() == "id"
        assert context.depth == 3

    def test_scoped_segment_popped_on_error(self, context):
        """The stack is restored even when the block raises."""
        with pytest.raises(RuntimeError):
            with context.in_property("parameters"):
                with context.in_named_item("id"):
                    raise RuntimeError("boom")

        assert context.depth == 0
        assert context.path == ""

    def test_direction_reset_on_exit(self, context):
        with pytest.raises(RuntimeError):
            with context.in_direction(DataDirection.RESPONSE):
                assert context.direction == DataDirection.RESPONSE
                raise RuntimeError("boom")

        assert context.direction == DataDirection.NONE

    def test_depth_limit(self):
        document = OpenApiDocument(openapi="3.0.3")
        context = ComparisonContext(document, document, ComparisonSettings(max_depth=1))

        context.push_property("paths")
        with pytest.raises(ComparisonLimitExceeded):
            context.push_property("/widgets")

    def test_node_limit(self):
        document = OpenApiDocument(openapi="3.0.3")
        context = ComparisonContext(document, document, ComparisonSettings(max_nodes=2))

        context.visit()
        context.visit()
        with pytest.raises(ComparisonLimitExceeded):
            context.visit()


class TestEmit:
    """Tests for finding creation."""

    def test_finding_built_from_catalog(self, context):
        with context.in_property("operationId"):
            finding = context.emit(ComparisonRule.MODIFIED_OPERATION_ID, old="a", new="b")

        assert finding.code == "ModifiedOperationId"
        assert finding.severity == Severity.BREAKING
        assert finding.kind == MessageType.UPDATE
        assert finding.message == "The operation id has changed from 'a' to 'b'."
        assert finding.old_summary == "a"
        assert finding.new_summary == "b"

    def test_path_is_a_snapshot(self, context):
        with context.in_property("responses"):
            with context.in_property("201"):
                finding = context.emit(ComparisonRule.ADDING_RESPONSE_CODE, name="201")

        assert context.path == ""
        assert finding.path == "/responses/201"
        assert finding.new_summary == "201"
        assert finding.old_summary == ""

    def test_findings_keep_emission_order(self, context):
        context.emit(ComparisonRule.ADDING_HEADER, name="A")
        context.emit(ComparisonRule.REMOVING_HEADER, name="B")
        context.emit(ComparisonRule.ADDING_HEADER, name="C")

        assert [m.old_summary or m.new_summary for m in context.messages] == ["A", "B", "C"]

    def test_direction_changes_wording_only(self, context):
        plain = context.emit(ComparisonRule.REMOVING_HEADER, name="ETag")
        with context.in_direction(DataDirection.RESPONSE):
            directed = context.emit(ComparisonRule.REMOVING_HEADER, name="ETag")

        assert directed.message == plain.message + " (in the response)"
        assert directed.severity == plain.severity

    def test_emit_with_wrong_severity_is_rejected(self, context):
        with pytest.raises(ValueError):
            context.emit_info(ComparisonRule.REMOVING_HEADER, name="ETag")
        with pytest.raises(ValueError):
            context.emit_breaking(ComparisonRule.ADDING_HEADER, name="ETag")

        assert context.messages == []

    def test_emit_with_matching_severity(self, context):
        assert context.emit_breaking(ComparisonRule.REMOVING_HEADER, name="ETag").is_breaking
        assert not context.emit_info(ComparisonRule.ADDING_HEADER, name="ETag").is_breaking

    def test_findings_are_frozen(self, context):
        finding = context.emit(ComparisonRule.ADDING_HEADER, name="ETag")
        with pytest.raises(Exception):
            finding.code = "Other"

    def test_summarize_value(self):
        assert summarize_value(True) == "true"
        assert summarize_value(None) == "null"
        assert summarize_value(["a", 1]) == "a, 1"
        assert summarize_value("x" * 60).endswith("...")


class TestRuleCatalog:
    """Tests for the static rule table."""

    def test_every_rule_has_an_entry(self):
        assert set(RULES) == set(ComparisonRule)

    @pytest.mark.parametrize(
        "rule, severity",
        [
            (ComparisonRule.MODIFIED_OPERATION_ID, Severity.BREAKING),
            (ComparisonRule.CHANGED_PARAMETER_ORDER, Severity.BREAKING),
            (ComparisonRule.REMOVED_REQUIRED_PARAMETER, Severity.BREAKING),
            (ComparisonRule.ADDING_REQUIRED_PARAMETER, Severity.BREAKING),
            (ComparisonRule.ADDING_OPTIONAL_PARAMETER, Severity.INFO),
            (ComparisonRule.ADDING_RESPONSE_CODE, Severity.BREAKING),
            (ComparisonRule.REMOVED_RESPONSE_CODE, Severity.BREAKING),
            (ComparisonRule.LONG_RUNNING_OPERATION_EXTENSION_CHANGED, Severity.BREAKING),
            (ComparisonRule.ADDING_HEADER, Severity.INFO),
            (ComparisonRule.REMOVING_HEADER, Severity.BREAKING),
        ],
    )
    def test_core_severities(self, rule, severity):
        assert RULES[rule].severity == severity

    def test_operation_presence_kinds(self):
        assert RULES[ComparisonRule.ADDED_OPERATION].kind == MessageType.ADDITION
        assert RULES[ComparisonRule.REMOVED_OPERATION].kind == MessageType.REMOVAL


class TestReferenceResolver:
    """Tests for $ref resolution."""

    COMPONENTS = {
        "Limit": Parameter(name="limit", location="query"),
        "Alias": Parameter.model_validate({"$ref": "#/components/parameters/Limit"}),
        "Loop": Parameter.model_validate({"$ref": "#/components/parameters/Loop"}),
        "a/b": Parameter(name="slashed", location="query"),
    }

    def test_blank_marker_is_not_a_reference(self):
        assert not is_reference(None)
        assert not is_reference("   ")
        assert is_reference("#/components/parameters/Limit")

    def test_reference_name(self):
        assert reference_name("#/components/parameters/Limit") == "Limit"
        assert reference_name("#/components/parameters/a~1b") == "a/b"
        assert reference_name("other.yaml#/Limit") is None

    def test_resolve_one_hop(self):
        resolved = resolve_reference("#/components/parameters/Alias", self.COMPONENTS)
        assert resolved.ref == "#/components/parameters/Limit"

    def test_resolve_missing(self):
        assert resolve_reference("#/components/parameters/Nope", self.COMPONENTS) is None
        assert resolve_reference("#/components/parameters/Limit", None) is None

    def test_dereference_follows_chain(self):
        node = Parameter.model_validate({"$ref": "#/components/parameters/Alias"})
        assert dereference(node, self.COMPONENTS).name == "limit"

    def test_dereference_returns_plain_node_unchanged(self):
        node = Parameter(name="q", location="query")
        assert dereference(node, self.COMPONENTS) is node

    def test_dereference_whitespace_marker_is_plain(self):
        node = Parameter.model_validate({"$ref": "  ", "name": "q", "in": "query"})
        assert dereference(node, self.COMPONENTS) is node

    def test_dereference_cycle(self):
        node = Parameter.model_validate({"$ref": "#/components/parameters/Loop"})
        assert dereference(node, self.COMPONENTS) is None

    def test_dereference_hop_limit(self):
        node = Parameter.model_validate({"$ref": "#/components/parameters/Alias"})
        assert dereference(node, self.COMPONENTS, max_hops=1) is None

    def test_pointer_into_a_component_is_not_a_name(self):
        assert reference_name("#/components/schemas/Pet/properties/owner") is None
        assert reference_name("#/definitions/Pet") is None
        assert reference_name("#/components/schemas") is None

    def test_reference_kind_must_match(self):
        assert reference_name("#/components/schemas/Limit", "parameters") is None
        assert resolve_reference("#/components/schemas/Limit", self.COMPONENTS, "parameters") is None
        assert resolve_reference("#/components/parameters/Limit", self.COMPONENTS, "parameters").name == "limit"

    def test_dereference_uses_the_node_kind(self):
        """A parameter marker pointing at a schema does not resolve."""
        node = Parameter.model_validate({"$ref": "#/components/schemas/Limit"})
        assert dereference(node, self.COMPONENTS) is None

    def test_escaped_component_name(self):
        node = Parameter.model_validate({"$ref": "#/components/parameters/a~1b"})
        assert dereference(node, self.COMPONENTS).name == "slashed"
