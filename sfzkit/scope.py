"""Three-level scope machine (global, group, region) that commits opcodes into regions.

Opcodes are held in a per-scope pending map until the scope closes, either
because a new section header arrives or because input ended. Closing a
`<global>` scope updates the running defaults, closing a `<group>` scope
replaces the group defaults, and closing a `<region>` scope layers
global, group and region values and appends the result to the layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .config import ParserSettings
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from .errors import MissingPitchCenterError, MissingSampleNameError
from .models import Layer, PlaybackOptions, Region
from .opcodes import AMP_RELEASE, LOOP, LOOP_END, LOOP_START, OPCODES, Draft, PendingValue, extract
from .tokenizer import IndexedNumericOpcode, NumericOpcode, Opcode, StringOpcode

_LOGGER = logging.getLogger("sfzkit.scope")

_SAMPLE_FIELDS: Mapping[str, str] = MappingProxyType(
    {
        LOOP: "loop",
        LOOP_START: "loop_start",
        LOOP_END: "loop_end",
        AMP_RELEASE: "decay_time",
    }
)


class ScopeKind(Enum):
    GLOBAL = "global"
    GROUP = "group"
    REGION = "region"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ScopeMode:
    kind: ScopeKind
    name: str
    line: int | None = None

    @classmethod
    def from_header(cls, name: str, line: int | None = None) -> ScopeMode:
        try:
            kind = ScopeKind(name)
        except ValueError:
            kind = ScopeKind.UNKNOWN
        return cls(kind, name, line)


def build_region(draft: Draft, *, line: int | None = None) -> Region:
    """Validate and normalize a merged draft into a committed region."""
    fields = dict(draft)

    sample_name = fields.get("sample_name") or ""
    if not sample_name:
        raise MissingSampleNameError(line)

    if fields.get("midi_pitch") is None:
        # Samplers commonly fall back to lokey when no key center is given.
        if fields.get("midi_low") is None:
            raise MissingPitchCenterError(line, sample_name)
        fields["midi_pitch"] = fields["midi_low"]

    if fields.get("seq_length") is not None and fields.get("seq_position") is None:
        fields["seq_position"] = 1

    sample_values = {}
    for source, target in _SAMPLE_FIELDS.items():
        value = fields.pop(source, None)
        if value is not None:
            sample_values[target] = value
    if sample_values:
        fields["sample"] = PlaybackOptions(**sample_values)

    return Region.model_validate(fields)


class ScopeAccumulator:
    """Collects opcodes per scope and commits them into `layer.regions`.

    Commit failures raise `RegionCommitError` after the scope has been
    fully closed, so the caller can record the failure and keep feeding.
    """

    def __init__(
        self,
        layer: Layer,
        *,
        settings: ParserSettings | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._layer = layer
        self._settings = settings or ParserSettings()
        self._sink = sink or log_diagnostic
        self._mode = ScopeMode(ScopeKind.GLOBAL, ScopeKind.GLOBAL.value)
        self._pending: dict[str, PendingValue] = {}
        self._global: Draft = {}
        self._group: Draft = {}

    @property
    def mode(self) -> ScopeMode:
        return self._mode

    @property
    def pending(self) -> Mapping[str, PendingValue]:
        return MappingProxyType(self._pending)

    @property
    def global_defaults(self) -> Mapping[str, object]:
        return MappingProxyType(self._global)

    @property
    def group_defaults(self) -> Mapping[str, object]:
        return MappingProxyType(self._group)

    def push(self, opcode: Opcode) -> None:
        match opcode:
            case IndexedNumericOpcode(key=key, index=index, value=value):
                if self._settings.indexed_opcodes == "accumulate":
                    points = self._pending.get(key)
                    if not isinstance(points, dict):
                        points = {}
                        self._pending[key] = points
                    points.pop(index, None)
                    points[index] = value
                else:
                    self._pending[key] = {index: value}
            case NumericOpcode(key=key, value=value) | StringOpcode(key=key, value=value):
                self._pending[key] = value

    def enter(self, name: str, line: int | None = None) -> None:
        """Close the open scope, then open the scope named by a section header."""
        try:
            self.close()
        finally:
            self._mode = ScopeMode.from_header(name, line)
            self._pending.clear()

    def close(self) -> None:
        """Commit whatever the open scope holds. Also required at end of input."""
        mode = self._mode
        match mode.kind:
            case ScopeKind.GLOBAL:
                self._global.update(self._extract())
            case ScopeKind.GROUP:
                self._group = self._extract()
            case ScopeKind.REGION:
                own = self._extract()
                region = build_region({**self._global, **self._group, **own}, line=mode.line)
                self._layer.regions.append(region)
                _LOGGER.debug("Committed region %r", region.sample_name)
            case ScopeKind.UNKNOWN:
                if self._pending:
                    _LOGGER.debug(
                        "Discarding %d opcode(s) under <%s>", len(self._pending), mode.name
                    )
                self._pending.clear()

    def _extract(self) -> Draft:
        draft = extract(self._pending)
        if self._pending and self._settings.report_leftovers:
            mistyped = tuple(key for key in self._pending if key in OPCODES)
            unknown = tuple(key for key in self._pending if key not in OPCODES)
            if mistyped:
                self._report(DiagnosticKind.KIND_MISMATCH, "Mistyped or out of range", mistyped)
            if unknown:
                self._report(DiagnosticKind.LEFTOVER_OPCODES, "Unused", unknown)
        self._pending.clear()
        return draft

    def _report(self, kind: DiagnosticKind, label: str, keys: tuple[str, ...]) -> None:
        values = ", ".join(f"{key}={self._pending[key]!r}" for key in keys)
        self._sink(
            Diagnostic(
                kind,
                f"{label} opcodes in <{self._mode.name}>: {values}",
                line=self._mode.line,
                keys=keys,
            )
        )
