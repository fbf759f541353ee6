"""Memoizing front-end for the wear and cost engines.

Comparison views recompute the same strategies over and over; this engine
keeps recent series keyed by a content fingerprint of the strategy so that
identical strategies (by value) are computed once.

Fingerprint: SHA-256 over canonical JSON (sorted keys, no whitespace) of
every calculation-relevant field — everything except ``id`` and ``name``.
Two caches (wear, cost), each bounded; when full, the oldest entry is
evicted first.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from wear_tco.config.limits import DEFAULT_SETTINGS, SimulationSettings
from wear_tco.config.strategy import Strategy
from wear_tco.engine.cost import accumulate_cost
from wear_tco.engine.wear import simulate_wear
from wear_tco.models.results import CalculationMetrics, CostAccumulation, WearAccumulation

logger = logging.getLogger(__name__)

T = TypeVar("T")


def strategy_fingerprint(strategy: Strategy) -> str:
    """Stable hex digest of the strategy's calculation inputs."""
    payload = strategy.model_dump(mode="json", exclude={"id", "name"})
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class BoundedCache(Generic[T]):
    """Insertion-ordered map that drops its oldest entry beyond ``capacity``."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: OrderedDict[str, T] = OrderedDict()

    def get(self, key: str) -> T | None:
        return self._entries.get(key)

    def put(self, key: str, value: T) -> None:
        self._entries[key] = value
        while len(self._entries) > self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("cache full (%d): evicted %s", self.capacity, evicted[:12])

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class CachedSeries(Generic[T]):
    """Engine output plus how it was obtained."""

    samples: list[T]
    metrics: CalculationMetrics


class CachedCalculationEngine:
    """Wear / cost engine with bounded result caches.

    Usage::

        engine = CachedCalculationEngine()
        wear = engine.wear(strategy)      # computed
        wear = engine.wear(strategy)      # served from cache
        wear.metrics.from_cache           # True
    """

    def __init__(self, settings: SimulationSettings | None = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._wear_cache: BoundedCache[list[WearAccumulation]] = BoundedCache(self._settings.cache_capacity)
        self._cost_cache: BoundedCache[list[CostAccumulation]] = BoundedCache(self._settings.cache_capacity)

    def wear(self, strategy: Strategy) -> CachedSeries[WearAccumulation]:
        return self._run(
            strategy, self._wear_cache,
            lambda s: simulate_wear(s, self._settings),
        )

    def cost(self, strategy: Strategy) -> CachedSeries[CostAccumulation]:
        return self._run(strategy, self._cost_cache, accumulate_cost)

    def _run(
        self,
        strategy: Strategy,
        cache: BoundedCache[list[T]],
        compute: Callable[[Strategy], list[T]],
    ) -> CachedSeries[T]:
        started = time.perf_counter()
        key = strategy_fingerprint(strategy)

        cached = cache.get(key)
        from_cache = cached is not None
        if cached is None:
            cached = compute(strategy)
            cache.put(key, cached)
        else:
            logger.debug("cache hit for strategy %s", strategy.id)

        elapsed_ms = (time.perf_counter() - started) * 1_000.0
        return CachedSeries(
            samples=list(cached),
            metrics=CalculationMetrics(
                calculation_time_ms=elapsed_ms,
                data_points=len(cached),
                from_cache=from_cache,
            ),
        )

    def clear_cache(self) -> None:
        self._wear_cache.clear()
        self._cost_cache.clear()

    def cache_stats(self) -> dict[str, int]:
        return {
            "wear_cache_size": len(self._wear_cache),
            "cost_cache_size": len(self._cost_cache),
        }
