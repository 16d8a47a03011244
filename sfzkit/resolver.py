"""Select the regions of a layer that should sound for a played note."""

from __future__ import annotations

from typing import Any

from .models import Layer, Match, PlaybackOptions, Query, Region

CENTS_PER_SEMITONE = 100

_MERGED_OPTIONS = ("loop", "loop_start", "loop_end", "decay_time")


def _in_range(value: int, low: int | None, high: int | None) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def region_matches(region: Region, query: Query) -> bool:
    if not _in_range(query.note, region.midi_low, region.midi_high):
        return False
    # Pitch-only queries ignore velocity ranges.
    if query.velocity is None:
        return True
    return _in_range(query.velocity, region.vel_low, region.vel_high)


def merge_options(region: PlaybackOptions | None, layer: PlaybackOptions) -> dict[str, Any]:
    """Region value wins, then layer value; fields unset on both are left out."""
    merged: dict[str, Any] = {}
    for name in _MERGED_OPTIONS:
        value = getattr(region, name) if region is not None else None
        if value is None:
            value = getattr(layer, name)
        if value is not None:
            merged[name] = value
    return merged


def resolve(layer: Layer, query: Query) -> list[Match]:
    """Return one match per region covering the query, in region order.

    Overlapping regions all match; no scoring happens beyond order.
    Read-only on `layer`.
    """
    matches: list[Match] = []
    for region in layer.regions:
        if not region_matches(region, query):
            continue
        detune = (query.note - region.midi_pitch) * CENTS_PER_SEMITONE + (region.offset_detune or 0)
        velocity = None
        if query.velocity is not None:
            velocity = query.velocity + (region.offset_vol or 0)
        matches.append(
            Match(
                name=region.sample_name,
                note=query.note,
                detune=detune,
                velocity=velocity,
                **merge_options(region.sample, layer.sample),
            )
        )
    return matches


def find_samples(layer: Layer, note: int, velocity: int | None = None) -> list[Match]:
    return resolve(layer, Query(note=note, velocity=velocity))
