"""Tests for SegmentHistory, Time and Run models."""

from __future__ import annotations

import dataclasses

import numpy as np
import pandas as pd
import pytest

from statistical_pb.models.history import SegmentHistory
from statistical_pb.models.run import Run, Segment
from statistical_pb.models.timing import Time, TimingMethod


def test_time_get() -> None:
    t = Time(real_time=12.5, game_time=None)
    assert t.get(TimingMethod.REAL_TIME) == 12.5
    assert t.get(TimingMethod.GAME_TIME) is None
    assert t.get("real_time") == 12.5


def test_from_mapping_keeps_attempt_order() -> None:
    hist = SegmentHistory.from_mapping(
        {
            5: Time(real_time=3.0, game_time=2.5),
            2: Time(real_time=1.0),
            9: Time(game_time=4.0),
        }
    )
    assert len(hist) == 3
    assert hist.df.index.tolist() == [2, 5, 9]
    np.testing.assert_allclose(hist.times(TimingMethod.REAL_TIME), [1.0, 3.0])
    np.testing.assert_allclose(hist.times(TimingMethod.GAME_TIME), [2.5, 4.0])
    assert hist.count("real_time") == 2
    assert hist.warnings == ()


def test_from_seconds_single_method() -> None:
    hist = SegmentHistory.from_seconds({1: 10.0, 2: None, 3: 12.0}, TimingMethod.GAME_TIME)
    assert hist.count(TimingMethod.GAME_TIME) == 2
    assert hist.count(TimingMethod.REAL_TIME) == 0
    assert hist.max_time(TimingMethod.GAME_TIME) == 12.0
    assert hist.max_time(TimingMethod.REAL_TIME) is None


def test_from_dataframe_adds_missing_columns_and_drops_extra() -> None:
    df = pd.DataFrame({"real_time": [1.0, 2.0], "comment": ["a", "b"]}, index=[10, 11])
    hist = SegmentHistory.from_dataframe(df)
    assert list(hist.df.columns) == ["real_time", "game_time"]
    assert hist.df["game_time"].isna().all()
    assert hist.df.index.name == "attempt_id"


def test_non_finite_values_are_dropped_with_warning() -> None:
    df = pd.DataFrame({"real_time": [1.0, np.inf, 3.0], "game_time": [-np.inf, 2.0, 2.5]}, index=[1, 2, 3])
    hist = SegmentHistory.from_dataframe(df)

    np.testing.assert_allclose(hist.times("real_time"), [1.0, 3.0])
    np.testing.assert_allclose(hist.times("game_time"), [2.0, 2.5])
    assert len(hist.warnings) == 2
    assert any("real_time" in w for w in hist.warnings)


def test_duplicate_attempt_ids_rejected() -> None:
    df = pd.DataFrame({"real_time": [1.0, 2.0]}, index=[4, 4])
    with pytest.raises(ValueError, match="Duplicate attempt ids"):
        SegmentHistory.from_dataframe(df)


def test_non_integer_attempt_ids_rejected() -> None:
    df = pd.DataFrame({"real_time": [1.0]}, index=["first"])
    with pytest.raises(ValueError, match="Attempt ids"):
        SegmentHistory.from_dataframe(df)


def test_fractional_attempt_ids_rejected() -> None:
    df = pd.DataFrame({"real_time": [1.0, 2.0]}, index=[1.0, 1.5])
    with pytest.raises(ValueError, match="Attempt ids must be integers"):
        SegmentHistory.from_dataframe(df)


def test_whole_float_attempt_ids_accepted() -> None:
    df = pd.DataFrame({"real_time": [1.0, 2.0]}, index=[2.0, 1.0])
    hist = SegmentHistory.from_dataframe(df)
    assert hist.df.index.tolist() == [1, 2]
    assert hist.df.index.dtype == np.int64


def test_empty_history() -> None:
    hist = SegmentHistory.empty()
    assert len(hist) == 0
    assert hist.times(TimingMethod.REAL_TIME).size == 0


def test_history_frozen() -> None:
    hist = SegmentHistory.empty()
    with pytest.raises(dataclasses.FrozenInstanceError):
        hist.df = pd.DataFrame()  # type: ignore[misc]


def test_run_personal_best() -> None:
    h = SegmentHistory.from_seconds({1: 5.0})
    run = Run.from_segments(
        [
            Segment("Intro", h, Time(real_time=5.0, game_time=4.0)),
            Segment("Boss", h, Time(real_time=11.0, game_time=None)),
        ]
    )
    assert len(run) == 2
    assert run.personal_best(TimingMethod.REAL_TIME) == 11.0
    assert run.personal_best(TimingMethod.GAME_TIME) is None


def test_run_without_pb() -> None:
    h = SegmentHistory.from_seconds({1: 5.0})
    assert Run.from_segments([Segment("Only", h)]).personal_best("real_time") is None
    assert Run.from_segments([]).personal_best("real_time") is None
