import threading
from collections.abc import Iterable, Mapping
from typing import Optional

from loguru import logger

from health_ai.health.models import HealthSample, MetricKind


class MetricStore:
    """
    In-memory samples for each metric kind, owned by the caller.

    A kind's samples are only ever replaced as a whole. Readers get immutable
    tuples, so a reader never sees a partially replaced list while a fetch
    completes on another thread.
    """

    def __init__(self, metrics: Optional[Mapping[MetricKind, Iterable[HealthSample]]] = None):
        self._lock = threading.Lock()
        self._metrics: dict[MetricKind, tuple[HealthSample, ...]] = {}
        if metrics:
            self.replace_all(metrics)

    def replace(self, kind: MetricKind, samples: Iterable[HealthSample]) -> None:
        """
        Replace all samples for a kind.

        Args:
            kind: The metric kind to replace.
            samples: The new samples. Every sample must be of ``kind``.

        Raises:
            ValueError: If a sample belongs to a different kind.
        """
        new_samples = tuple(samples)
        for sample in new_samples:
            if sample.kind != kind:
                raise ValueError(f"Cannot store {sample.kind.value} sample under {kind.value}")

        with self._lock:
            self._metrics[kind] = new_samples
        logger.debug(f"Replaced {kind.value} samples ({len(new_samples)} entries)")

    def replace_all(self, metrics: Mapping[MetricKind, Iterable[HealthSample]]) -> None:
        for kind, samples in metrics.items():
            self.replace(kind, samples)

    def samples(self, kind: MetricKind) -> tuple[HealthSample, ...]:
        with self._lock:
            return self._metrics.get(kind, ())

    def snapshot(self) -> dict[MetricKind, tuple[HealthSample, ...]]:
        """Consistent copy of every kind's samples."""
        with self._lock:
            return dict(self._metrics)

    def is_empty(self) -> bool:
        with self._lock:
            return not any(self._metrics.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetricStore):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    def __repr__(self) -> str:
        counts = {kind.value: len(samples) for kind, samples in self.snapshot().items()}
        return f"MetricStore({counts})"
