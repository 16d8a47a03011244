from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

_LOGGER = logging.getLogger("sfzkit.parser")


class DiagnosticKind(Enum):
    UNRECOGNIZED_TOKEN = "unrecognized_token"
    LEFTOVER_OPCODES = "leftover_opcodes"
    KIND_MISMATCH = "kind_mismatch"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Advisory parser message. Never affects which regions get committed."""

    kind: DiagnosticKind
    message: str
    line: int | None = None
    keys: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    _LOGGER.warning("%s", diagnostic)


@dataclass
class CollectingSink:
    """Sink that keeps every diagnostic it receives, in order."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [item for item in self.diagnostics if item.kind is kind]

    def __len__(self) -> int:
        return len(self.diagnostics)
