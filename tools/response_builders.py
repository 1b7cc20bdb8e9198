"""
Helpers for the text half of tool output.
"""

from typing import Optional


def format_next_steps(next_steps: list[str]) -> str:
    """Render a "Next:" section."""
    return "Next:\n" + "\n".join(f"- {step}" for step in next_steps)


def summarize_list(
    subject: str,
    count: int,
    filter_hints: Optional[list[str]] = None,
    preview_lines: str = "",
    zero_reason_hints: Optional[list[str]] = None,
    next_steps: Optional[list[str]] = None,
) -> str:
    """
    Summary for list-style results: a count header, the filters applied, a
    preview of items, hints when nothing matched, and next steps.
    """
    bits = [f"{subject}: {count}."]

    if filter_hints:
        bits.append(f"Filter: {'; '.join(filter_hints)}.")

    if preview_lines:
        bits.append(f"Preview:\n{preview_lines}")

    if not count and zero_reason_hints:
        bits.append(f"No results. {'; '.join(zero_reason_hints)}.")

    if next_steps:
        bits.append(format_next_steps(next_steps))

    return "\n".join(bits)
