"""Uniswap v3 pool state helpers.

Typed views over the raw tuples returned by pool reads, plus the tick range the
core contracts enforce.
"""

from __future__ import annotations

from typing import TypedDict

MIN_TICK = -887272
MAX_TICK = 887272


class TickOutOfRangeError(ValueError):
    def __init__(self, tick: int):
        self.tick = tick
        super().__init__(f"tick {tick} out of range [{MIN_TICK}, {MAX_TICK}]")


class Slot0(TypedDict):
    sqrt_price_x96: int
    tick: int
    observation_index: int
    observation_cardinality: int
    observation_cardinality_next: int
    fee_protocol: int
    unlocked: bool


def parse_slot0(raw: tuple) -> Slot0:
    return Slot0(
        sqrt_price_x96=int(raw[0]),
        tick=int(raw[1]),
        observation_index=int(raw[2]),
        observation_cardinality=int(raw[3]),
        observation_cardinality_next=int(raw[4]),
        fee_protocol=int(raw[5]),
        unlocked=bool(raw[6]),
    )


def narrow_tick(tick: int) -> int:
    value = int(tick)
    if value < MIN_TICK or value > MAX_TICK:
        raise TickOutOfRangeError(value)
    return value
