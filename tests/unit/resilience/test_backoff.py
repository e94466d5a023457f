"""
kvfacade — Backoff Policy Tests
"""

import pytest

from kvfacade.resilience.backoff import BackoffPolicy, backoff_delay


class TestBackoffDelay:
    def test_default_is_fixed_five_milliseconds(self) -> None:
        assert [backoff_delay(i) for i in range(5)] == [0.005] * 5

    def test_exponential_growth_is_capped(self) -> None:
        delays = [backoff_delay(i, interval=0.1, exponential_base=2.0, max_interval=0.5) for i in range(5)]
        assert delays == pytest.approx([0.1, 0.2, 0.4, 0.5, 0.5])

    def test_jitter_stays_within_factor(self) -> None:
        for attempt in range(50):
            delay = backoff_delay(attempt, interval=0.1, jitter=True, jitter_factor=0.2)
            assert 0.08 <= delay <= 0.12

    def test_zero_interval(self) -> None:
        assert backoff_delay(3, interval=0.0, jitter=True) == 0.0


class TestBackoffPolicy:
    def test_defaults(self) -> None:
        policy = BackoffPolicy()

        assert policy.attempts == 10
        assert policy.delay(0) == 0.005
        assert policy.worst_case_wait == pytest.approx(0.05)

    def test_with_attempts_keeps_schedule(self) -> None:
        policy = BackoffPolicy(interval=0.02, exponential_base=1.5, jitter=True)
        copy = policy.with_attempts(3)

        assert copy.attempts == 3
        assert copy.interval == 0.02
        assert copy.exponential_base == 1.5
        assert copy.jitter is True
        assert policy.attempts == 10

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"attempts": -1},
            {"interval": -0.001},
            {"interval": 2.0, "max_interval": 1.0},
            {"exponential_base": 0.5},
            {"jitter_factor": 1.5},
        ],
    )
    def test_invalid_configuration(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            BackoffPolicy(**kwargs)
