from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Report:
    """Tabular projection: column names plus one dict per row keyed by column."""

    title: str
    columns: list[str]
    rows: list[dict] = field(default_factory=list)
