"""Bounded concurrent fan-out with keyed result collection."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from mediahub.exceptions import MediaHubError

logger = logging.getLogger(__name__)


@dataclass
class FanOutResult[K: Hashable, T]:
    """Outcome of a fan-out, split into successes and failures.

    Both mappings follow the order of the keys passed to ``fan_out``,
    regardless of completion order.
    """

    results: dict[K, T] = field(default_factory=dict)
    errors: dict[K, Exception] = field(default_factory=dict)


def fan_out[K: Hashable, T](
    keys: Iterable[K],
    task: Callable[[K], T],
    *,
    max_concurrency: int,
    name: str = "fan-out",
) -> FanOutResult[K, T]:
    """Run ``task`` once per key on a bounded worker pool and wait for all.

    At most ``max_concurrency`` tasks run at the same time. The call blocks
    until every task has returned or raised. A failing task never affects
    the others: its exception is recorded under its key.

    Args:
        keys: Unique units of work (backend types, library ids, indexes...).
        task: Called with one key, may raise.
        max_concurrency: Upper bound of simultaneously running tasks.
        name: Label used for worker thread names and log messages.

    Returns:
        FanOutResult with per-key results and per-key exceptions.

    Raises:
        ValueError: If max_concurrency is lower than 1.
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")

    keys = list(keys)
    outcome: FanOutResult[K, T] = FanOutResult()
    if not keys:
        return outcome

    workers = min(max_concurrency, len(keys))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=name) as pool:
        futures = {key: pool.submit(task, key) for key in keys}

    for key in keys:
        try:
            outcome.results[key] = futures[key].result()
        except MediaHubError as e:
            logger.warning("%s: %s failed: %s", name, key, e)
            outcome.errors[key] = e
        except Exception as e:
            logger.warning("%s: %s failed unexpectedly", name, key, exc_info=True)
            outcome.errors[key] = e

    logger.debug(
        "%s finished: %d succeeded, %d failed",
        name,
        len(outcome.results),
        len(outcome.errors),
    )
    return outcome
