"""SpecDiff - breaking change detection for OpenAPI documents."""

from specdiff.modules.comparator import compare_documents
from specdiff.modules.openapi_parser import parse_spec
from specdiff.modules.pipeline import compare_sources, compare_specs
from specdiff.types import ComparisonMessage, ComparisonSettings, OpenApiDocument

__version__ = "0.1.0"

__all__ = [
    "ComparisonMessage",
    "ComparisonSettings",
    "OpenApiDocument",
    "__version__",
    "compare_documents",
    "compare_sources",
    "compare_specs",
    "parse_spec",
]
