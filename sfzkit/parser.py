from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import ParserSettings
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from .errors import RegionCommitError, SfzLoadError
from .models import Layer
from .scope import ScopeAccumulator
from .tokenizer import SectionHeader, Unrecognized, tokenize

_LOGGER = logging.getLogger("sfzkit.parser")


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of one parse pass.

    `errors` lists the regions that were dropped, in source order. An empty
    list means every region in the text was committed.
    """

    layer: Layer
    errors: tuple[str, ...]
    diagnostics: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


class _CountingSink:
    def __init__(self, target: DiagnosticSink) -> None:
        self._target = target
        self.count = 0

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.count += 1
        self._target(diagnostic)


def parse_sfz(
    text: str,
    layer: Layer | None = None,
    *,
    settings: ParserSettings | None = None,
    sink: DiagnosticSink | None = None,
) -> ParseResult:
    """Parse SFZ text and append the committed regions to `layer`.

    Regions already in `layer` are kept in place. One parse per layer at a
    time; concurrent parses into the same layer must be serialized by the caller.
    """
    target = layer if layer is not None else Layer()
    counter = _CountingSink(sink or log_diagnostic)
    scope = ScopeAccumulator(target, settings=settings, sink=counter)
    errors: list[str] = []

    def _record(exc: RegionCommitError) -> None:
        _LOGGER.warning("Skipping region: %s", exc)
        errors.append(str(exc))

    for line, token in tokenize(text):
        match token:
            case SectionHeader(name=name):
                try:
                    scope.enter(name, line)
                except RegionCommitError as exc:
                    _record(exc)
            case Unrecognized(text=raw):
                counter(
                    Diagnostic(DiagnosticKind.UNRECOGNIZED_TOKEN, f"Unknown SFZ token: {raw}", line=line)
                )
            case _:
                scope.push(token)

    try:
        scope.close()
    except RegionCommitError as exc:
        _record(exc)

    return ParseResult(target, tuple(errors), counter.count)


def sfz_to_layer(
    text: str,
    layer: Layer,
    *,
    settings: ParserSettings | None = None,
    sink: DiagnosticSink | None = None,
) -> list[str]:
    """Parse into an existing layer and return only the commit errors."""
    return list(parse_sfz(text, layer, settings=settings, sink=sink).errors)


def load_sfz(
    path: str | Path,
    layer: Layer | None = None,
    *,
    settings: ParserSettings | None = None,
    sink: DiagnosticSink | None = None,
) -> ParseResult:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise SfzLoadError(f"Cannot read instrument file {source}: {exc}") from exc
    _LOGGER.debug("Loaded %s (%d bytes)", source, len(text))
    return parse_sfz(text, layer, settings=settings, sink=sink)

