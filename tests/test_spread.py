from __future__ import annotations

from sfzkit.models import Layer, Region
from sfzkit.spread import spread_layer, spread_regions


def _ranges(regions: list[Region]) -> list[tuple[int | None, int | None]]:
    return [(region.midi_low, region.midi_high) for region in regions]


def test_single_region_covers_whole_keyboard() -> None:
    spread = spread_regions([Region(sample_name="A", midi_pitch=64)])
    assert _ranges(spread) == [(0, 127)]
    assert spread[0].midi_pitch == 64
    assert spread[0].sample_name == "A"


def test_two_regions_split_at_midpoint() -> None:
    regions = [Region(sample_name="A", midi_pitch=32), Region(sample_name="B", midi_pitch=96)]
    assert _ranges(spread_regions(regions)) == [(0, 64), (65, 127)]


def test_three_regions_round_boundaries_down() -> None:
    regions = [
        Region(sample_name="A", midi_pitch=10),
        Region(sample_name="B", midi_pitch=80),
        Region(sample_name="C", midi_pitch=96),
    ]
    assert _ranges(spread_regions(regions)) == [(0, 45), (46, 88), (89, 127)]


def test_empty_input() -> None:
    assert spread_regions([]) == []


def test_spread_leaves_no_gaps_or_overlaps() -> None:
    pitches = [21, 24, 27, 30, 45, 46, 60, 61, 100, 108]
    spread = spread_regions([Region(sample_name=str(p), midi_pitch=p) for p in pitches])
    assert spread[0].midi_low == 0
    assert spread[-1].midi_high == 127
    for left, right in zip(spread, spread[1:]):
        assert right.midi_low == left.midi_high + 1
    for region in spread:
        assert region.midi_low <= region.midi_pitch <= region.midi_high


def test_spread_does_not_modify_input() -> None:
    regions = [Region(sample_name="A", midi_pitch=60)]
    spread_regions(regions)
    assert regions[0].midi_low is None


def test_spread_layer_assigns_ranges_in_place() -> None:
    layer = Layer(regions=[Region(sample_name="A", midi_pitch=32), Region(sample_name="B", midi_pitch=96)])
    regions = layer.regions
    assert spread_layer(layer) is layer
    assert layer.regions is regions
    assert _ranges(layer.regions) == [(0, 64), (65, 127)]


def test_spread_layer_skips_layers_with_ranges() -> None:
    layer = Layer(
        regions=[
            Region(sample_name="A", midi_pitch=32, midi_low=30, midi_high=40),
            Region(sample_name="B", midi_pitch=96),
        ]
    )
    spread_layer(layer)
    assert _ranges(layer.regions) == [(30, 40), (None, None)]
