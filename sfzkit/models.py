from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

MIDI_MIN = 0
MIDI_MAX = 127

MidiValue = Annotated[int, Field(ge=MIDI_MIN, le=MIDI_MAX)]
CurvePoint = tuple[int, int]


class PlaybackOptions(BaseModel):
    """Loop and envelope settings; every field is optional so options can be layered."""

    loop: bool | None = None
    loop_start: int | None = None
    loop_end: int | None = None
    decay_time: float | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class Region(BaseModel):
    """One keyboard/velocity zone bound to one sample.

    `midi_pitch` is the note at which the sample sounds at its recorded pitch.
    Missing key or velocity bounds leave the region unconstrained on that axis.
    """

    sample_name: str = Field(min_length=1)
    midi_pitch: MidiValue
    midi_low: MidiValue | None = None
    midi_high: MidiValue | None = None
    vel_low: MidiValue | None = None
    vel_high: MidiValue | None = None
    offset_detune: int | None = None
    offset_vol: int | None = None
    bend_up: int | None = None
    bend_down: int | None = None
    amp_vel_curve: CurvePoint | None = None
    amp_vel_curve_points: tuple[CurvePoint, ...] | None = None
    seq_length: int | None = None
    seq_position: int | None = None
    group: int | None = None
    group_off_by: int | None = None
    sample: PlaybackOptions | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def has_key_range(self) -> bool:
        return self.midi_low is not None or self.midi_high is not None

    def with_range(self, low: int, high: int) -> Region:
        return self.model_copy(update={"midi_low": low, "midi_high": high})


class Layer(BaseModel):
    """Ordered regions plus layer-wide playback defaults."""

    regions: list[Region] = Field(default_factory=list)
    sample: PlaybackOptions = Field(default_factory=PlaybackOptions)

    model_config = ConfigDict(extra="forbid")


class Query(BaseModel):
    note: MidiValue
    velocity: MidiValue | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class Match(BaseModel):
    """A region selected for a query, with its pitch and volume adjustments applied."""

    name: str
    note: int
    detune: int
    velocity: int | None = None
    loop: bool | None = None
    loop_start: int | None = None
    loop_end: int | None = None
    decay_time: float | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
