"""OpenAPI 3.x Specification Parser.

Turns YAML or JSON specification text into the OpenApiDocument model graph
the comparator walks. References are kept as markers; resolution happens
during comparison.
"""

import logging
from typing import Any

import yaml
from pydantic import ValidationError

from specdiff.exceptions import SpecParseError
from specdiff.types import OpenApiDocument


logger = logging.getLogger("specdiff.parser")


def parse_spec(spec: str | dict[str, Any]) -> OpenApiDocument:
    """Parse an OpenAPI specification.

    Args:
        spec: OpenAPI spec as YAML/JSON string or already-parsed dict.

    Returns:
        The parsed document.

    Raises:
        SpecParseError: If the document is malformed or unsupported.
    """
    # JSON is a subset of YAML, one loader handles both
    if isinstance(spec, str):
        try:
            raw_spec = yaml.safe_load(spec)
        except yaml.YAMLError as e:
            raise SpecParseError(f"Malformed specification: {e}") from e
    else:
        raw_spec = spec

    if not isinstance(raw_spec, dict):
        raise SpecParseError("Specification must be a mapping at the top level")

    if "swagger" in raw_spec:
        raise SpecParseError(
            f"Unsupported Swagger version: {raw_spec['swagger']}. Only OpenAPI 3.x is supported."
        )

    openapi_version = str(raw_spec.get("openapi", ""))
    if not openapi_version.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {openapi_version}. Only 3.x is supported."
        )

    try:
        document = OpenApiDocument.model_validate(raw_spec)
    except ValidationError as e:
        raise SpecParseError(f"Invalid OpenAPI document: {e}") from e

    logger.debug(
        f"Parsed {document.title} v{document.version}: {len(document.paths)} paths"
    )
    return document


def load_spec_from_file(file_path: str) -> OpenApiDocument:
    """Load and parse an OpenAPI spec from a file.

    Args:
        file_path: Path to YAML or JSON spec file.

    Returns:
        Parsed OpenAPI document.
    """
    with open(file_path, encoding="utf-8") as f:
        content = f.read()
    return parse_spec(content)
