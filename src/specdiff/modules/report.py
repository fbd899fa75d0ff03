"""Report rendering.

Turns the findings of a comparison run into the JSON dump or the markdown
change table printed by the CLI.
"""

from pydantic import TypeAdapter

from specdiff.types import ComparisonMessage, ComparisonSummary, MessageType, Severity

from .comparator.rules import ComparisonRule


_MESSAGES_ADAPTER = TypeAdapter(list[ComparisonMessage])


def summarize_findings(messages: list[ComparisonMessage]) -> ComparisonSummary:
    """Count findings by severity and rule code.

    Args:
        messages: Findings of a comparison run.

    Returns:
        ComparisonSummary for display and exit-code decisions.
    """
    by_code: dict[str, int] = {}
    for message in messages:
        by_code[message.code] = by_code.get(message.code, 0) + 1

    breaking = sum(1 for message in messages if message.severity == Severity.BREAKING)
    return ComparisonSummary(
        total=len(messages),
        breaking=breaking,
        informational=len(messages) - breaking,
        by_code=by_code,
    )


def render_json(messages: list[ComparisonMessage]) -> str:
    """Full structured dump, camelCase keys, indented."""
    return _MESSAGES_ADAPTER.dump_json(messages, indent=2, by_alias=True).decode("utf-8")


def render_text(messages: list[ComparisonMessage]) -> str:
    """Markdown table: added operations first, then one row per updated operation."""
    lines = [
        "",
        "| **Change Type** | **API** | **Summary** |",
        "| ------- | ------- | ------- |",
    ]

    for message in messages:
        if message.code == ComparisonRule.ADDED_OPERATION.value:
            lines.append(f"| Addition | {message.operation} | {message.message} |")

    updated: dict[str, list[ComparisonMessage]] = {}
    for message in messages:
        if message.kind == MessageType.UPDATE and message.operation:
            updated.setdefault(message.operation, []).append(message)

    for operation, changes in updated.items():
        breaking = sum(1 for change in changes if change.is_breaking)
        lines.append(
            f"| Update | {operation} | {breaking} breaking, "
            f"{len(changes) - breaking} informational |"
        )

    return "\n".join(lines)
