"""Per-segment attempt history.

A :class:`SegmentHistory` is the keyed collection ``attempt id -> Time`` that
the timer accumulates for one segment. It is stored as a DataFrame indexed by
attempt id with one float column per :class:`TimingMethod`; absent values are
``NaN``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .timing import Time, TimingMethod

COLUMNS: Tuple[str, ...] = tuple(m.value for m in TimingMethod)


@dataclass(frozen=True)
class SegmentHistory:
    """Historical completion times of one segment.

    Notes
    -----
    - ``df`` is indexed by integer attempt id (sorted ascending) and has the
      columns ``real_time`` and ``game_time`` as float64 seconds.
    - Only finite values count as present. Non-finite inputs are turned into
      ``NaN`` at construction and reported in ``warnings``.
    """

    df: pd.DataFrame
    warnings: Tuple[str, ...] = ()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> SegmentHistory:
        """Validate and normalise an attempt table.

        Missing timing-method columns are added as all-``NaN``. Extra columns
        are dropped.
        """
        out = pd.DataFrame(index=df.index.copy())
        for col in COLUMNS:
            if col in df.columns:
                out[col] = pd.to_numeric(df[col], errors="raise").astype(np.float64)
            else:
                out[col] = np.nan

        try:
            ids = out.index.astype(np.int64)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Attempt ids must be integers, got index dtype {df.index.dtype}") from e
        if not bool((out.index == ids).all()):
            bad = out.index[out.index != ids].tolist()
            raise ValueError(f"Attempt ids must be integers, got {bad[:20]}")
        out.index = ids
        if out.index.has_duplicates:
            dup = out.index[out.index.duplicated()].unique().tolist()
            raise ValueError(f"Duplicate attempt ids in history: {dup[:20]}")
        out.index.name = "attempt_id"
        out = out.sort_index()

        warnings = []
        values = out.to_numpy()
        bad = np.isinf(values)
        if np.any(bad):
            for col, n_bad in zip(COLUMNS, bad.sum(axis=0)):
                if n_bad:
                    warnings.append(f"Dropped {int(n_bad)} non-finite {col} value(s)")
            out = out.mask(bad)

        return cls(df=out, warnings=tuple(warnings))

    @classmethod
    def from_mapping(cls, times: Mapping[int, Time]) -> SegmentHistory:
        """Build from ``{attempt_id: Time}``."""
        ids = list(times.keys())
        data = {
            col: [_as_float(times[i].get(TimingMethod(col))) for i in ids]
            for col in COLUMNS
        }
        return cls.from_dataframe(pd.DataFrame(data, index=pd.Index(ids, dtype=np.int64)))

    @classmethod
    def from_seconds(
        cls,
        times: Mapping[int, Optional[float]],
        method: Union[TimingMethod, str] = TimingMethod.REAL_TIME,
    ) -> SegmentHistory:
        """Build from ``{attempt_id: seconds}`` recorded under a single timing method."""
        col = TimingMethod(method).value
        ids = list(times.keys())
        df = pd.DataFrame({col: [_as_float(times[i]) for i in ids]}, index=pd.Index(ids, dtype=np.int64))
        return cls.from_dataframe(df)

    @classmethod
    def empty(cls) -> SegmentHistory:
        return cls.from_dataframe(pd.DataFrame({c: [] for c in COLUMNS}, index=pd.Index([], dtype=np.int64)))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return int(len(self.df))

    def times(self, method: Union[TimingMethod, str]) -> np.ndarray:
        """Present values for ``method``, in attempt-id order."""
        col = self.df[TimingMethod(method).value].to_numpy(dtype=np.float64)
        return col[np.isfinite(col)]

    def count(self, method: Union[TimingMethod, str]) -> int:
        return int(self.times(method).size)

    def max_time(self, method: Union[TimingMethod, str]) -> Optional[float]:
        """Largest present value, or None if nothing is recorded."""
        t = self.times(method)
        if t.size == 0:
            return None
        return float(np.max(t))


def _as_float(value: Optional[float]) -> float:
    return np.nan if value is None else float(value)
