from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, TextIO


@dataclass
class DiagnosticLog:
    """Collects conversion warnings; with ``echo`` set they are also printed to stderr.

    Lines carry the same ``[warn]`` / ``[i]`` prefixes the command-line tools
    print, so a flushed log reads like a captured console session.
    """

    destination: Path | None = None
    echo: bool = False
    stream: TextIO | None = None
    _lines: List[str] = field(default_factory=list, init=False, repr=False)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def warnings(self) -> List[str]:
        return [line[len("[warn] "):] for line in self._lines if line.startswith("[warn] ")]

    def warn(self, message: str) -> None:
        self._emit(f"[warn] {message}")

    def info(self, message: str) -> None:
        self._emit(f"[i] {message}")

    def _emit(self, line: str) -> None:
        self._lines.append(line)
        if self.echo:
            print(line, file=self.stream or sys.stderr)

    def flush(self) -> None:
        if self.destination is None or not self._lines:
            return
        self.destination.parent.mkdir(parents=True, exist_ok=True)
        text = "\n".join(self._lines) + "\n"
        self.destination.write_text(text, encoding="utf-8")
