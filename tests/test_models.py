from __future__ import annotations

import pytest
from pydantic import ValidationError

from sfzkit.models import Layer, Match, PlaybackOptions, Region


def test_region_requires_sample_name() -> None:
    with pytest.raises(ValidationError):
        Region(sample_name="", midi_pitch=60)


def test_region_rejects_out_of_range_pitch() -> None:
    with pytest.raises(ValidationError):
        Region(sample_name="a.wav", midi_pitch=128)


def test_region_is_frozen() -> None:
    region = Region(sample_name="a.wav", midi_pitch=60)
    with pytest.raises(ValidationError):
        region.midi_pitch = 61  # type: ignore[misc]


def test_with_range_returns_a_copy() -> None:
    region = Region(sample_name="a.wav", midi_pitch=60)
    ranged = region.with_range(50, 70)
    assert (ranged.midi_low, ranged.midi_high) == (50, 70)
    assert region.midi_low is None
    assert ranged.has_key_range
    assert not region.has_key_range


def test_layer_defaults() -> None:
    layer = Layer()
    assert layer.regions == []
    assert layer.sample == PlaybackOptions()


def test_match_as_dict_omits_unset_fields() -> None:
    match = Match(name="a.wav", note=60, detune=0, loop=False)
    assert match.as_dict() == {"name": "a.wav", "note": 60, "detune": 0, "loop": False}
