from datetime import date
from typing import Optional

from aura_lens.models import AuraResult

_DIMENSIONS = ("activity", "impact", "social", "style", "onchain")


def format_aura_report(result: AuraResult, username: Optional[str] = None) -> str:
    """Format an AuraResult into a Markdown card."""
    sections = [f"# {result.emoji} {result.label}\n"]
    sections.append(f"{result.description}\n")
    sections.append(f"**Aura Score: {result.score}** / 100\n")
    if username:
        sections.append(f"@{username.lstrip('@')}\n")

    sections.append("## Breakdown\n")
    sections.append("| Dimension | Score |")
    sections.append("|---|---|")
    for dim in _DIMENSIONS:
        sections.append(f"| {dim} | {getattr(result.breakdown, dim)} |")
    sections.append("")
    sections.append(f"*Generated {date.today()}*")

    return "\n".join(sections)
