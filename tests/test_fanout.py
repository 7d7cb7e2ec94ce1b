"""Tests for bounded fan-out."""

import threading
import time

import pytest

from mediahub.exceptions import AdapterError
from mediahub.lib import FanOutResult, fan_out


class ConcurrencyProbe:
    """Task recording how many calls overlap."""

    def __init__(self, delay: float = 0.02) -> None:
        self._delay = delay
        self._lock = threading.Lock()
        self.running = 0
        self.peak = 0

    def __call__(self, key: int) -> int:
        with self._lock:
            self.running += 1
            self.peak = max(self.peak, self.running)
        time.sleep(self._delay)
        with self._lock:
            self.running -= 1
        return key * 10


class TestFanOut:
    """Tests for fan_out."""

    def test_collects_results_by_key(self) -> None:
        outcome = fan_out([1, 2, 3], lambda key: key * 2, max_concurrency=2)
        assert outcome.results == {1: 2, 2: 4, 3: 6}
        assert outcome.errors == {}

    def test_results_follow_key_order_not_completion_order(self) -> None:
        """Slow early keys still come first."""
        delays = {"slow": 0.05, "medium": 0.02, "fast": 0.0}

        def task(key: str) -> str:
            time.sleep(delays[key])
            return key.upper()

        outcome = fan_out(list(delays), task, max_concurrency=3)
        assert list(outcome.results) == ["slow", "medium", "fast"]

    def test_failure_does_not_affect_other_keys(self) -> None:
        def task(key: str) -> str:
            if key == "bad":
                raise AdapterError("backend down")
            return key

        outcome = fan_out(["a", "bad", "b"], task, max_concurrency=2)
        assert outcome.results == {"a": "a", "b": "b"}
        assert list(outcome.errors) == ["bad"]
        assert isinstance(outcome.errors["bad"], AdapterError)

    def test_unexpected_exception_is_recorded(self) -> None:
        """Non-library exceptions are contained like backend failures."""

        def task(key: int) -> int:
            if key == 2:
                raise RuntimeError("bug")
            return key

        outcome = fan_out([1, 2], task, max_concurrency=2)
        assert outcome.results == {1: 1}
        assert isinstance(outcome.errors[2], RuntimeError)

    @pytest.mark.parametrize("cap", [1, 2, 4])
    def test_concurrency_never_exceeds_cap(self, cap: int) -> None:
        probe = ConcurrencyProbe()
        outcome = fan_out(range(8), probe, max_concurrency=cap)
        assert len(outcome.results) == 8
        assert probe.peak <= cap

    def test_runs_tasks_concurrently(self) -> None:
        probe = ConcurrencyProbe(delay=0.05)
        fan_out(range(4), probe, max_concurrency=4)
        assert probe.peak > 1

    def test_empty_keys(self) -> None:
        outcome = fan_out([], lambda key: key, max_concurrency=4)
        assert outcome == FanOutResult()

    @pytest.mark.parametrize("cap", [0, -1])
    def test_invalid_cap_raises(self, cap: int) -> None:
        with pytest.raises(ValueError, match="max_concurrency"):
            fan_out([1], lambda key: key, max_concurrency=cap)
