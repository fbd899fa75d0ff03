"""Integration tests for the OpenAPI parser."""

import pytest

from specdiff.exceptions import SpecParseError
from specdiff.modules.openapi_parser import load_spec_from_file, parse_spec
from specdiff.types import ParameterLocation, Schema


SAMPLE_SPEC = """
openapi: "3.0.3"
info:
  title: Test API
  version: "1.0.0"
paths:
  /users/{user_id}:
    get:
      operationId: getUser
      x-ms-long-running-operation: true
      parameters:
        - name: user_id
          in: path
          required: true
          schema:
            type: integer
      responses:
        200:
          description: User found
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/User"
        "404":
          description: User not found
  /items:
    get:
      operationId: listItems
      responses:
        "200":
          description: List of items
          content:
            application/json:
              schema:
                type: array
                items:
                  $ref: "#/components/schemas/Item"
components:
  schemas:
    User:
      type: object
      required:
        - id
        - name
      properties:
        id:
          type: integer
        name:
          type: string
        email:
          type: string
    Item:
      type: object
      additionalProperties:
        type: string
      properties:
        id:
          type: integer
"""


class TestOpenAPIParser:
    """Tests for OpenAPI parsing."""

    def test_parse_spec_basic(self):
        """Parse a basic OpenAPI spec."""
        document = parse_spec(SAMPLE_SPEC)

        assert document.openapi == "3.0.3"
        assert document.title == "Test API"
        assert document.version == "1.0.0"
        assert list(document.paths) == ["/users/{user_id}", "/items"]

    def test_operations_and_parameters(self):
        """Operations and parameter locations are mapped."""
        document = parse_spec(SAMPLE_SPEC)

        operations = document.paths["/users/{user_id}"].operations()
        assert list(operations) == ["get"]

        operation = operations["get"]
        assert operation.operation_id == "getUser"
        assert operation.parameters[0].location == ParameterLocation.PATH
        assert operation.parameters[0].schema_.type == "integer"

    def test_status_codes_are_strings(self):
        """An unquoted YAML status code is normalized to a string key."""
        document = parse_spec(SAMPLE_SPEC)

        responses = document.paths["/users/{user_id}"].get.responses
        assert list(responses) == ["200", "404"]

    def test_references_kept_as_markers(self):
        """$ref markers are preserved for the comparator to resolve."""
        document = parse_spec(SAMPLE_SPEC)

        schema = document.paths["/users/{user_id}"].get.responses["200"].content[
            "application/json"
        ].schema_
        assert schema.ref == "#/components/schemas/User"
        assert document.components.schemas["User"].required == ["id", "name"]

    def test_vendor_extensions(self):
        """x-* keys are exposed as extensions."""
        document = parse_spec(SAMPLE_SPEC)

        extensions = document.paths["/users/{user_id}"].get.extensions
        assert extensions == {"x-ms-long-running-operation": True}

    def test_additional_properties_schema(self):
        document = parse_spec(SAMPLE_SPEC)

        item = document.components.schemas["Item"]
        assert isinstance(item.additional_properties, Schema)
        assert item.additional_properties.type == "string"

    def test_json_text(self):
        """JSON is parsed by the same loader."""
        document = parse_spec('{"openapi": "3.1.0", "info": {"title": "J"}, "paths": {}}')
        assert document.title == "J"

    def test_swagger_rejected(self):
        with pytest.raises(SpecParseError, match="Swagger"):
            parse_spec({"swagger": "2.0", "paths": {}})

    def test_unsupported_version(self):
        with pytest.raises(SpecParseError, match="Unsupported OpenAPI version"):
            parse_spec({"openapi": "4.0.0"})

    def test_malformed_yaml(self):
        with pytest.raises(SpecParseError):
            parse_spec("openapi: [unclosed")

    def test_not_a_mapping(self):
        with pytest.raises(SpecParseError):
            parse_spec("- just\n- a list\n")

    def test_invalid_parameter_location(self):
        spec = {
            "openapi": "3.0.0",
            "paths": {"/x": {"get": {"parameters": [{"name": "f", "in": "formData"}]}}},
        }
        with pytest.raises(SpecParseError):
            parse_spec(spec)

    def test_load_spec_from_file(self, tmp_path):
        spec_file = tmp_path / "openapi.yaml"
        spec_file.write_text(SAMPLE_SPEC, encoding="utf-8")

        document = load_spec_from_file(str(spec_file))

        assert document.title == "Test API"
