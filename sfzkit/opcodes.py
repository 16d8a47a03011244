"""Typed extraction of pending opcode values into region draft fields."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

from .models import MIDI_MAX, MIDI_MIN
from .tokenizer import Number

CurvePoints = dict[int, int]
PendingValue = Union[Number, str, CurvePoints]
Draft = dict[str, Any]

# Draft-only keys that end up inside `Region.sample` at commit time.
AMP_RELEASE = "amp_release"
LOOP = "loop"
LOOP_START = "loop_start"
LOOP_END = "loop_end"


class ValueKind(Enum):
    STR = "str"
    MIDI = "midi"
    INT = "int"
    NUMBER = "number"
    CURVE = "curve"
    LOOP_MODE = "loop_mode"


@dataclass(frozen=True, slots=True)
class OpcodeRule:
    field: str | None
    kind: ValueKind


OPCODES: Mapping[str, OpcodeRule] = MappingProxyType(
    {
        "sample": OpcodeRule("sample_name", ValueKind.STR),
        "pitch_keycenter": OpcodeRule("midi_pitch", ValueKind.MIDI),
        "lokey": OpcodeRule("midi_low", ValueKind.MIDI),
        "hikey": OpcodeRule("midi_high", ValueKind.MIDI),
        "lovel": OpcodeRule("vel_low", ValueKind.MIDI),
        "hivel": OpcodeRule("vel_high", ValueKind.MIDI),
        "pitch_keytrack": OpcodeRule(None, ValueKind.NUMBER),
        "tune": OpcodeRule("offset_detune", ValueKind.INT),
        "bend_up": OpcodeRule("bend_up", ValueKind.INT),
        "bend_down": OpcodeRule("bend_down", ValueKind.INT),
        "amp_velcurve": OpcodeRule("amp_vel_curve", ValueKind.CURVE),
        "seq_length": OpcodeRule("seq_length", ValueKind.INT),
        "seq_position": OpcodeRule("seq_position", ValueKind.INT),
        "ampeg_release": OpcodeRule(AMP_RELEASE, ValueKind.NUMBER),
        "group": OpcodeRule("group", ValueKind.INT),
        "off_by": OpcodeRule("group_off_by", ValueKind.INT),
        "loop_mode": OpcodeRule(LOOP, ValueKind.LOOP_MODE),
        "loop_start": OpcodeRule(LOOP_START, ValueKind.INT),
        "loop_end": OpcodeRule(LOOP_END, ValueKind.INT),
    }
)

_LOOP_MODES: Mapping[str, bool] = MappingProxyType(
    {
        "no_loop": False,
        "one_shot": False,
        "loop_continuous": True,
        "loop_sustain": True,
    }
)


def _as_int(value: PendingValue) -> int | None:
    match value:
        case bool():
            return None
        case int():
            return value
        case float() if value.is_integer():
            return int(value)
        case _:
            return None


def coerce_value(kind: ValueKind, value: PendingValue) -> Any:
    """Return `value` converted for `kind`, or None when the kind does not match."""
    match kind:
        case ValueKind.STR:
            return value if isinstance(value, str) and value else None
        case ValueKind.INT:
            return _as_int(value)
        case ValueKind.MIDI:
            number = _as_int(value)
            if number is None or not MIDI_MIN <= number <= MIDI_MAX:
                return None
            return number
        case ValueKind.NUMBER:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return value
            return None
        case ValueKind.CURVE:
            return value if isinstance(value, dict) and value else None
        case ValueKind.LOOP_MODE:
            return _LOOP_MODES.get(value) if isinstance(value, str) else None


def extract(pending: MutableMapping[str, PendingValue]) -> Draft:
    """Move every recognized, well-typed value out of `pending` into a draft.

    Values that are unknown or of the wrong kind stay in `pending`.
    """
    draft: Draft = {}
    for key, rule in OPCODES.items():
        if key not in pending:
            continue
        value = coerce_value(rule.kind, pending[key])
        if value is None:
            continue
        del pending[key]
        if rule.field is None:
            continue
        if rule.kind is ValueKind.CURVE:
            draft[rule.field] = next(reversed(value.items()))
            draft[f"{rule.field}_points"] = tuple(sorted(value.items()))
        else:
            draft[rule.field] = value
    return draft
