"""'Did you mean?' suggestions for mistyped names and flags."""

from difflib import get_close_matches
from typing import Sequence


def suggest_names(
    typo: str,
    candidates: Sequence[str],
    n: int = 3,
    cutoff: float = 0.6,
) -> list[str]:
    """Find names similar to a mistyped one.

    Args:
        typo: The mistyped name
        candidates: Known names
        n: Maximum number of suggestions
        cutoff: Similarity threshold (0-1)

    Returns:
        List of similar names, best match first
    """
    return get_close_matches(typo, list(candidates), n=n, cutoff=cutoff)


def format_suggestions(suggestions: list[str]) -> str:
    """Format suggestions for display.

    Args:
        suggestions: List of suggested names

    Returns:
        Formatted string with suggestions, empty when there are none
    """
    if not suggestions:
        return ""

    if len(suggestions) == 1:
        return f"Did you mean: [cyan]{suggestions[0]}[/cyan]?"

    formatted = ", ".join(f"[cyan]{s}[/cyan]" for s in suggestions[:-1])
    return f"Did you mean: {formatted} or [cyan]{suggestions[-1]}[/cyan]?"
