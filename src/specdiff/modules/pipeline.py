"""Main Pipeline Orchestrator.

Coordinates loading, parsing and comparing two versions of a specification.
"""

import logging
from typing import Any

from specdiff.types import ComparisonMessage, ComparisonSettings

from .comparator import compare_documents
from .openapi_parser import parse_spec
from .report import summarize_findings
from .spec_source import DEFAULT_TIMEOUT, fetch_spec_texts


# Set up logging
logger = logging.getLogger("specdiff.pipeline")


def compare_specs(
    old_spec: str | dict[str, Any],
    new_spec: str | dict[str, Any],
    settings: ComparisonSettings | None = None,
) -> list[ComparisonMessage]:
    """Parse two specifications and compare them.

    Args:
        old_spec: The previous version, as YAML/JSON text or a parsed dict.
        new_spec: The new version, as YAML/JSON text or a parsed dict.
        settings: Limits for the comparison run.

    Returns:
        Findings in emission order.

    Raises:
        SpecParseError: If either specification cannot be parsed.
        ComparisonLimitExceeded: If the run exceeds its limits.
    """
    logger.info("📄 Parsing specifications...")
    old_document = parse_spec(old_spec)
    new_document = parse_spec(new_spec)
    logger.info(f"   ✓ Old: {old_document.title} v{old_document.version}")
    logger.info(f"   ✓ New: {new_document.title} v{new_document.version}")

    logger.info("🔬 Comparing documents...")
    messages = compare_documents(old_document, new_document, settings)

    summary = summarize_findings(messages)
    logger.info(
        f"   ✓ {summary.total} differences, {summary.breaking} breaking"
    )
    for message in messages:
        logger.debug(f"   {message.severity.value}: {message.code} {message.path}")

    return messages


async def compare_sources(
    old_location: str,
    new_location: str,
    settings: ComparisonSettings | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> list[ComparisonMessage]:
    """Fetch two specifications from paths or URLs and compare them.

    Both locations are read concurrently before the comparison starts.

    Args:
        old_location: Filesystem path or http(s) URL of the previous version.
        new_location: Filesystem path or http(s) URL of the new version.
        settings: Limits for the comparison run.
        timeout: HTTP timeout in seconds.

    Returns:
        Findings in emission order.

    Raises:
        SpecLoadError: If either location cannot be read.
    """
    logger.info("🌐 Reading specifications...")
    logger.info(f"   Old: {old_location}")
    logger.info(f"   New: {new_location}")
    old_text, new_text = await fetch_spec_texts(old_location, new_location, timeout=timeout)

    return compare_specs(old_text, new_text, settings)
