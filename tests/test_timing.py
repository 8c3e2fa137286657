import asyncio
import dataclasses

import pytest

from serde_bench.instrumentation.timing import ResultSet, Timer, async_timed, median_index


def test_median_picks_upper_index():
    result = ResultSet.from_samples([3, 1, 2])

    assert result.median == 3
    assert result.samples == (3.0, 1.0, 2.0)


def test_median_even_count():
    # sorted [1, 2, 3, 4] -> index (4 + 1) // 2 == 2
    assert ResultSet.from_samples([4, 1, 3, 2]).median == 3


def test_median_sorts_numerically():
    # A lexicographic sort would order 10 before 9.
    assert ResultSet.from_samples([10.0, 9.0, 100.0]).median == 100.0
    assert ResultSet.from_samples([10.0, 9.0, 2.0, 1.0]).median == 9.0


def test_single_sample_median_is_clamped():
    result = ResultSet.from_samples([7.5])

    assert result.median == 7.5
    assert result.mean == 7.5


@pytest.mark.parametrize("n,expected", [(1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (10, 5)])
def test_median_index(n, expected):
    assert median_index(n) == expected


def test_empty_samples_rejected():
    with pytest.raises(ValueError):
        ResultSet.from_samples([])
    with pytest.raises(ValueError):
        median_index(0)


def test_result_set_is_immutable():
    result = ResultSet.from_samples([1.0, 2.0])

    with pytest.raises(dataclasses.FrozenInstanceError):
        result.median = 0.0


def test_mean_min_max_percentile():
    result = ResultSet.from_samples([1.0, 2.0, 3.0, 4.0, 5.0])

    assert result.mean == pytest.approx(3.0)
    assert result.min == 1.0
    assert result.max == 5.0
    assert result.percentile(50) == pytest.approx(3.0)
    assert result.percentile(100) == pytest.approx(5.0)


def test_to_dict():
    data = ResultSet.from_samples([2.0, 1.0]).to_dict()

    assert data["count"] == 2
    assert data["samples_ms"] == [2.0, 1.0]
    assert data["median_ms"] == 2.0
    assert data["mean_ms"] == pytest.approx(1.5)


def test_timer_measures_elapsed():
    timer = Timer("t").start()
    assert timer.running
    timer.stop()

    assert not timer.running
    assert timer.elapsed_ms >= 0


def test_async_timed_stops_on_error():
    captured = {}

    async def failing():
        async with async_timed("x") as timer:
            captured["timer"] = timer
            raise KeyError("x")

    with pytest.raises(KeyError):
        asyncio.run(failing())

    assert not captured["timer"].running


def test_async_timed_records_duration():
    async def body():
        async with async_timed("sleep") as timer:
            await asyncio.sleep(0.01)
        return timer

    timer = asyncio.run(body())

    assert not timer.running
    assert timer.elapsed_ms >= 5
