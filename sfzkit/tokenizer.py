"""Line tokenizer for SFZ-style instrument text.

Each line becomes at most one token. Patterns are tried in a fixed order
(header, indexed numeric, numeric, string) so that `amp_velcurve_1=64` is
read as an indexed opcode before the plain forms get a chance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Union

COMMENT_PREFIX = "//"
BYTE_ORDER_MARK = "\ufeff"

_HEADER_RE = re.compile(r"^<([^>]+)>$")
_INDEXED_RE = re.compile(r"^([^=]+?)_(\d+)\s*=\s*(\d+)$")
_NUMERIC_RE = re.compile(r"^([^=]+?)\s*=\s*(-?(?:\d+(?:\.\d*)?|\.\d+))$")
_STRING_RE = re.compile(r"^([^=]+?)\s*=\s*(.+)$")

Number = Union[int, float]


@dataclass(frozen=True, slots=True)
class SectionHeader:
    name: str


@dataclass(frozen=True, slots=True)
class IndexedNumericOpcode:
    key: str
    index: int
    value: int


@dataclass(frozen=True, slots=True)
class NumericOpcode:
    key: str
    value: Number


@dataclass(frozen=True, slots=True)
class StringOpcode:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class Unrecognized:
    text: str


Opcode = Union[IndexedNumericOpcode, NumericOpcode, StringOpcode]
Token = Union[SectionHeader, IndexedNumericOpcode, NumericOpcode, StringOpcode, Unrecognized]


def _to_number(literal: str) -> Number:
    if "." in literal:
        return float(literal)
    return int(literal)


def tokenize_line(line: str) -> Token | None:
    """Return the token for one line, or None for blank and comment lines."""
    line = line.strip()
    if not line or line.startswith(COMMENT_PREFIX):
        return None

    if match := _HEADER_RE.match(line):
        return SectionHeader(match.group(1).strip())

    if match := _INDEXED_RE.match(line):
        key, index, value = match.groups()
        return IndexedNumericOpcode(key.strip(), int(index), int(value))

    if match := _NUMERIC_RE.match(line):
        key, value = match.groups()
        return NumericOpcode(key.strip(), _to_number(value))

    if match := _STRING_RE.match(line):
        key, value = match.groups()
        return StringOpcode(key.strip(), value)

    return Unrecognized(line)


def tokenize(text: str) -> Iterator[tuple[int, Token]]:
    """Yield `(line_number, token)` pairs, 1-based, skipping lines with no token."""
    text = text.removeprefix(BYTE_ORDER_MARK)
    for number, line in enumerate(text.splitlines(), start=1):
        token = tokenize_line(line)
        if token is not None:
            yield number, token
