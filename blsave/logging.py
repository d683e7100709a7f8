from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

PREVIEW_CHARS = 72


@dataclass
class SkipLogger:
    """Collects skipped and failed records and writes them to a trace file."""

    destination: Path

    def __post_init__(self) -> None:
        self._lines: List[str] = []

    def __len__(self) -> int:
        return len(self._lines)

    def record(
        self,
        *,
        line_number: int,
        kind: str,
        reason: str,
        text: str | None = None,
    ) -> None:
        entry = f"line {line_number:>7} {kind:<7} {reason}"
        if text:
            preview = text if len(text) <= PREVIEW_CHARS else text[:PREVIEW_CHARS] + "..."
            entry += f" | {preview!r}"
        self._lines.append(entry)

    def flush(self) -> None:
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        text = "\n".join(self._lines) + ("\n" if self._lines else "")
        self.destination.write_text(text, encoding="utf-8")
