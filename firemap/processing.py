"""
Calendar-day truncation and the duration filter

Detections are grouped on coordinates rounded to LOCATION_KEY_DECIMALS. A
location whose detections all fall on one calendar day is treated as a
transient hotspot and removed as a whole.
"""

import pandas as pd
import numpy as np
from .config import LOCATION_KEY_DECIMALS, MIN_DURATION_DAYS

ONE_DAY = pd.Timedelta(days=1)


def calendar_day(timestamps: pd.Series) -> pd.Series:
    """Truncate timestamps to midnight of their calendar day"""
    return timestamps.dt.floor('D')


def round_half_up(values: pd.Series, decimals: int) -> pd.Series:
    # pandas rounds half to even; ties go up here so 0.125 -> 0.13
    factor = 10 ** decimals
    return np.floor(values * factor + 0.5) / factor


def location_key(
    df: pd.DataFrame,
    decimals: int = LOCATION_KEY_DECIMALS
) -> pd.DataFrame:
    """
    Compute the LocationKey of every detection

    Args:
        df: Detections with latitude/longitude columns
        decimals: Number of decimals kept when rounding

    Returns:
        DataFrame with lat_key and lon_key columns, aligned on df's index
    """
    return pd.DataFrame({
        'lat_key': round_half_up(df['latitude'], decimals),
        'lon_key': round_half_up(df['longitude'], decimals)
    }, index=df.index)


def location_duration_days(
    df: pd.DataFrame,
    decimals: int = LOCATION_KEY_DECIMALS
) -> pd.Series:
    """
    Inclusive calendar-day span of each detection's location group

    A group seen on one day only has a duration of 1, a group seen on
    day N and day N+1 has a duration of 2, however close in time the
    detections were.

    Returns:
        Integer Series aligned on df's index
    """
    if df.empty:
        return pd.Series(dtype='int64', index=df.index)

    keys = location_key(df, decimals)
    days = calendar_day(df['timestamp'])
    grouped = days.groupby([keys['lat_key'], keys['lon_key']])
    first_day = grouped.transform('min')
    last_day = grouped.transform('max')

    return ((last_day - first_day) // ONE_DAY + 1).astype('int64')


def filter_by_duration(
    df: pd.DataFrame,
    min_days: int = MIN_DURATION_DAYS,
    decimals: int = LOCATION_KEY_DECIMALS
) -> pd.DataFrame:
    """
    Drop every location whose detections span fewer than min_days days

    Groups are kept or dropped whole. Surviving rows keep their input order.

    Args:
        df: Parsed detections
        min_days: Shortest inclusive span, in calendar days, that is kept
        decimals: Rounding used for the location key

    Returns:
        Filtered detections with a fresh index
    """
    if df.empty:
        return df.reset_index(drop=True)

    durations = location_duration_days(df, decimals)
    return df[durations >= min_days].reset_index(drop=True)
