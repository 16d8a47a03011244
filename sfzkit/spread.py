from __future__ import annotations

import logging
from typing import Sequence

from .models import MIDI_MAX, MIDI_MIN, Layer, Region

_LOGGER = logging.getLogger("sfzkit.spread")


def spread_regions(regions: Sequence[Region]) -> list[Region]:
    """Split the keyboard between regions ordered by ascending `midi_pitch`.

    Each boundary sits at the midpoint of adjacent pitch centers, rounded
    down, so the ranges cover 0..127 with no gaps or overlaps. The input
    order is kept as given.
    """
    count = len(regions)
    spread: list[Region] = []
    for index, region in enumerate(regions):
        low = MIDI_MIN
        high = MIDI_MAX
        if index > 0:
            low = (regions[index - 1].midi_pitch + region.midi_pitch) // 2 + 1
        if index < count - 1:
            high = (region.midi_pitch + regions[index + 1].midi_pitch) // 2
        spread.append(region.with_range(low, high))
    return spread


def spread_layer(layer: Layer) -> Layer:
    """Assign key ranges in place when no region in `layer` has one."""
    if any(region.has_key_range for region in layer.regions):
        _LOGGER.debug("Layer already has key ranges, leaving it untouched")
        return layer
    layer.regions[:] = spread_regions(layer.regions)
    return layer
