from __future__ import annotations


class SfzError(Exception):
    """Base error for the sfzkit library."""


class RegionCommitError(SfzError):
    """Raised when a region scope cannot be committed to a layer."""

    label = "Invalid region"

    def __init__(self, line: int | None = None, sample_name: str | None = None) -> None:
        self.line = line
        self.sample_name = sample_name
        super().__init__(self.describe())

    def describe(self) -> str:
        text = self.label
        if self.sample_name:
            text = f"{text} for sample {self.sample_name!r}"
        if self.line is not None:
            text = f"{text} (region at line {self.line})"
        return text


class MissingSampleNameError(RegionCommitError):
    """Raised when a region has no `sample` opcode."""

    label = "Missing sample name"


class MissingPitchCenterError(RegionCommitError):
    """Raised when a region has neither `pitch_keycenter` nor `lokey`."""

    label = "Missing pitch_keycenter"


class InvalidSettingsError(SfzError):
    """Raised when parser settings cannot be parsed or validated."""


class SfzLoadError(SfzError):
    """Raised when an instrument file cannot be read."""
