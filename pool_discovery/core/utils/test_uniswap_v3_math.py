import pytest

from pool_discovery.core.utils.uniswap_v3_math import (
    MAX_TICK,
    MIN_TICK,
    TickOutOfRangeError,
    narrow_tick,
    parse_slot0,
)


def test_parse_slot0():
    slot0 = parse_slot0((2**96, -887000, 3, 10, 20, 0, True))
    assert slot0 == {
        "sqrt_price_x96": 2**96,
        "tick": -887000,
        "observation_index": 3,
        "observation_cardinality": 10,
        "observation_cardinality_next": 20,
        "fee_protocol": 0,
        "unlocked": True,
    }


@pytest.mark.parametrize("tick", [MIN_TICK, -1, 0, 1, MAX_TICK])
def test_narrow_tick_in_range(tick):
    assert narrow_tick(tick) == tick


@pytest.mark.parametrize("tick", [MIN_TICK - 1, MAX_TICK + 1, 2**23, -(2**31)])
def test_narrow_tick_out_of_range(tick):
    with pytest.raises(TickOutOfRangeError) as exc_info:
        narrow_tick(tick)
    assert exc_info.value.tick == tick
    assert isinstance(exc_info.value, ValueError)
