# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Per-file counters and the aggregator that fills them.

Statistics live for exactly one trace file: ``new_stats`` starts them,
``record`` updates them once per valid record, and ``finalize`` freezes them
for reporting. The only state shared across files is the
``UnknownSampleCollector`` owned by ``TraceAggregator``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from typetally.analysis.classifier import narrow
from typetally.analysis.exclusion import (
    DEFAULT_POLICY,
    ExclusionPolicy,
    exclusion_reasons,
    is_excluded,
)
from typetally.analysis.validity import is_type_record
from typetally.core.categories import REPORT_CATEGORY_ORDER, REPORT_KEYS, Category
from typetally.core.model_types import LogComponent
from typetally.core.records import TypeRecord
from typetally.core.shapes import UnknownType
from typetally.exceptions import TypetallyTypeError, TypetallyValidationError
from typetally.logging import structured_extra

if TYPE_CHECKING:
    import os

logger: logging.Logger = logging.getLogger("typetally.analysis")

DEFAULT_SAMPLE_LIMIT: Final[int] = 5


def _zero_counts() -> dict[Category, int]:
    return dict.fromkeys(Category, 0)


@dataclass(slots=True)
class TraceCounters:
    """Mutable counters for the trace file currently being processed.

    Attributes:
        files: Always 1 for a single trace file.
        total: Valid records seen, excluded ones included.
        counts: One counter per category.
    """

    files: int = 1
    total: int = 0
    counts: dict[Category, int] = field(default_factory=_zero_counts)


@dataclass(frozen=True, slots=True)
class TraceStats:
    """Frozen per-file statistics produced by ``finalize``."""

    files: int
    total: int
    counts: Mapping[Category, int]

    def count(self, category: Category) -> int:
        return self.counts.get(category, 0)

    @property
    def classified(self) -> int:
        """Records that reached the classifier."""
        return sum(self.counts.values())

    @property
    def excluded(self) -> int:
        """Valid records removed by the exclusion filter."""
        return self.total - self.classified

    def as_dict(self) -> dict[str, int]:
        """Return the counters keyed by report field, in report order."""
        values = (self.files, self.total, *(self.count(category) for category in REPORT_CATEGORY_ORDER))
        return dict(zip(REPORT_KEYS, values, strict=True))


def new_stats() -> TraceCounters:
    """Return fresh counters for a trace file (``files`` = 1, all else 0)."""
    return TraceCounters()


def record(stats: TraceCounters, category: Category | None, *, excluded: bool = False) -> None:
    """Account for one valid record.

    Args:
        stats: Counters of the file being processed.
        category: Category assigned by the classifier; ignored (and may be
            ``None``) for excluded records.
        excluded: Whether the exclusion filter removed the record.

    Raises:
        TypetallyValidationError: If a non-excluded record has no category.
    """
    if not excluded and category is None:
        msg = "category is required for records that were not excluded"
        raise TypetallyValidationError(msg)
    stats.total += 1
    if not excluded and category is not None:
        stats.counts[category] += 1


def finalize(stats: TraceCounters) -> TraceStats:
    """Freeze `stats` into an immutable ``TraceStats`` snapshot."""
    return TraceStats(
        files=stats.files,
        total=stats.total,
        counts=MappingProxyType(dict(stats.counts)),
    )


class UnknownSampleCollector:
    """Bounded, first-come-first-served store of unknown records.

    One collector is shared by every file of a run, so the cap applies to the
    whole run rather than per file.
    """

    __slots__ = ("_capacity", "_samples", "_seen")

    def __init__(self, capacity: int = DEFAULT_SAMPLE_LIMIT) -> None:
        """Create an empty collector.

        Args:
            capacity: Maximum number of samples retained.

        Raises:
            TypetallyTypeError: If `capacity` is not an integer.
            TypetallyValidationError: If `capacity` is negative.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            msg = f"sample capacity must be an integer (got {type(capacity).__name__})"
            raise TypetallyTypeError(msg)
        if capacity < 0:
            msg = f"sample capacity must be non-negative (got {capacity})"
            raise TypetallyValidationError(msg)
        self._capacity = capacity
        self._samples: list[UnknownType] = []
        self._seen = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def samples(self) -> tuple[UnknownType, ...]:
        return tuple(self._samples)

    @property
    def seen(self) -> int:
        """Unknown records offered so far, retained or not."""
        return self._seen

    @property
    def is_full(self) -> bool:
        return len(self._samples) >= self._capacity

    def offer(self, sample: UnknownType) -> bool:
        """Retain `sample` if capacity remains.

        Returns:
            True if the sample was retained.
        """
        self._seen += 1
        if self.is_full:
            return False
        self._samples.append(sample)
        return True


class TraceAggregator:
    """Drive validity guard, exclusion filter, and classifier over one file.

    Attributes:
        policy: Exclusion rules applied to every valid record.
        collector: Run-wide store for unknown samples.
    """

    def __init__(
        self,
        *,
        policy: ExclusionPolicy = DEFAULT_POLICY,
        collector: UnknownSampleCollector | None = None,
    ) -> None:
        self.policy = policy
        self.collector = collector if collector is not None else UnknownSampleCollector()

    def aggregate(
        self,
        values: Iterable[object],
        *,
        source: str | os.PathLike[str] | None = None,
    ) -> TraceStats:
        """Classify every record of one trace file and count the outcomes.

        Args:
            values: Decoded JSON entries of a single trace file.
            source: Trace file the entries came from, used for logging.

        Returns:
            Frozen statistics for the file.
        """
        stats = new_stats()
        for value in values:
            if not is_type_record(value):
                continue
            type_record = TypeRecord.from_mapping(value)
            if is_excluded(type_record, self.policy):
                record(stats, None, excluded=True)
                if logger.isEnabledFor(logging.DEBUG):
                    self._log_excluded(type_record, source)
                continue
            shape = narrow(type_record)
            if isinstance(shape, UnknownType):
                retained = self.collector.offer(shape)
                logger.debug(
                    "Unknown type %s%s",
                    shape.id,
                    " (sampled)" if retained else "",
                    extra=structured_extra(
                        component=LogComponent.ANALYSIS,
                        path=source,
                        category=Category.UNKNOWN,
                        details={"id": shape.id, "flags": list(type_record.flags), "sampled": retained},
                    ),
                )
            record(stats, shape.kind)
        return finalize(stats)

    def _log_excluded(self, type_record: TypeRecord, source: str | os.PathLike[str] | None) -> None:
        reasons = exclusion_reasons(type_record, self.policy)
        logger.debug(
            "Excluded type %s (%s)",
            type_record.id,
            ", ".join(reasons),
            extra=structured_extra(
                component=LogComponent.ANALYSIS,
                path=source,
                details={"id": type_record.id, "reasons": list(reasons)},
            ),
        )


__all__ = [
    "DEFAULT_SAMPLE_LIMIT",
    "TraceAggregator",
    "TraceCounters",
    "TraceStats",
    "UnknownSampleCollector",
    "finalize",
    "new_stats",
    "record",
]
