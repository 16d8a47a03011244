from __future__ import annotations

from .config import ParserSettings
from .diagnostics import CollectingSink, Diagnostic, DiagnosticKind, DiagnosticSink
from .errors import (
    InvalidSettingsError,
    MissingPitchCenterError,
    MissingSampleNameError,
    RegionCommitError,
    SfzError,
    SfzLoadError,
)
from .models import Layer, Match, PlaybackOptions, Query, Region
from .parser import ParseResult, load_sfz, parse_sfz, sfz_to_layer
from .resolver import find_samples, resolve
from .spread import spread_layer, spread_regions

__all__ = [
    "CollectingSink",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSink",
    "InvalidSettingsError",
    "Layer",
    "Match",
    "MissingPitchCenterError",
    "MissingSampleNameError",
    "ParseResult",
    "ParserSettings",
    "PlaybackOptions",
    "Query",
    "Region",
    "RegionCommitError",
    "SfzError",
    "SfzLoadError",
    "find_samples",
    "load_sfz",
    "parse_sfz",
    "resolve",
    "sfz_to_layer",
    "spread_layer",
    "spread_regions",
]

__version__ = "0.1.0"
