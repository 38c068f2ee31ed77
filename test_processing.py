"""
Tests for the calendar-day duration filter
"""

import pandas as pd
import pytest
from firemap.processing import (
    calendar_day, filter_by_duration, location_duration_days, location_key, round_half_up
)
from firemap.validators import empty_detections


def test_location_key_rounds_half_up():
    values = pd.Series([0.125, -0.125, 34.121, 34.124, 34.126])

    rounded = round_half_up(values, 2)

    assert rounded.tolist() == pytest.approx([0.13, -0.12, 34.12, 34.12, 34.13])


def test_location_key_columns(make_detections):
    df = make_detections([("2023-06-01 10:00:00", 40.004, -120.006, 300)])

    keys = location_key(df)

    assert keys['lat_key'].iloc[0] == pytest.approx(40.0)
    assert keys['lon_key'].iloc[0] == pytest.approx(-120.01)


def test_calendar_day_truncates_to_midnight(make_detections):
    df = make_detections([("2023-06-01 23:59:59", 40.0, -120.0, 300)])

    assert calendar_day(df['timestamp']).iloc[0] == pd.Timestamp("2023-06-01", tz="UTC")


def test_single_detection_is_discarded(make_detections):
    df = make_detections([("2023-06-01 10:00:00", 40.0, -120.0, 300)])

    assert location_duration_days(df).tolist() == [1]
    assert filter_by_duration(df).empty


def test_same_day_detections_are_discarded_regardless_of_count(make_detections):
    df = make_detections([
        ("2023-06-01 00:00:00", 40.0, -120.0, 300),
        ("2023-06-01 08:00:00", 40.001, -120.0, 310),
        ("2023-06-01 16:00:00", 40.0, -120.001, 320),
        ("2023-06-01 23:59:59", 40.002, -120.002, 330),
    ])

    assert location_duration_days(df).tolist() == [1, 1, 1, 1]
    assert filter_by_duration(df).empty


def test_detections_across_midnight_are_kept(make_detections):
    df = make_detections([
        ("2023-06-01 23:59:59", 40.0, -120.0, 300),
        ("2023-06-02 00:00:00", 40.0, -120.0, 310),
    ])

    result = filter_by_duration(df)

    assert location_duration_days(df).tolist() == [2, 2]
    assert len(result) == 2


def test_span_counts_calendar_days_inclusively(make_detections):
    df = make_detections([
        ("2023-06-01 23:00:00", 40.0, -120.0, 300),
        ("2023-06-04 01:00:00", 40.0, -120.0, 310),
    ])

    assert location_duration_days(df).tolist() == [4, 4]


def test_groups_survive_whole_or_not_at_all(sample_detections):
    keys = location_key(sample_detections)
    result = filter_by_duration(sample_detections)
    result_keys = location_key(result)

    groups_before = sample_detections.groupby([keys['lat_key'], keys['lon_key']]).size()
    groups_after = result.groupby([result_keys['lat_key'], result_keys['lon_key']]).size()

    for key, count in groups_after.items():
        assert groups_before[key] == count
    assert len(result) == 6
    assert (45.0, -100.0) not in groups_after.index


def test_rounded_key_not_proximity_decides_grouping(make_detections):
    # 0.01 degrees apart: close enough for a time series, but different keys
    df = make_detections([
        ("2023-06-01 10:00:00", 40.00, -120.0, 300),
        ("2023-06-02 10:00:00", 40.01, -120.0, 310),
    ])

    assert filter_by_duration(df).empty


def test_survivors_keep_input_order(sample_detections):
    result = filter_by_duration(sample_detections)

    expected = sample_detections.iloc[:6].reset_index(drop=True)
    pd.testing.assert_frame_equal(result, expected)


def test_filter_is_idempotent(sample_detections):
    first = filter_by_duration(sample_detections)
    second = filter_by_duration(sample_detections)

    pd.testing.assert_frame_equal(first, second)
    pd.testing.assert_frame_equal(filter_by_duration(first), first)


def test_filter_does_not_modify_input(sample_detections):
    before = sample_detections.copy()

    filter_by_duration(sample_detections)

    pd.testing.assert_frame_equal(sample_detections, before)


def test_empty_input():
    result = filter_by_duration(empty_detections())

    assert result.empty
    assert list(result.columns) == list(empty_detections().columns)
