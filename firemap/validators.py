"""
Record parsing and validation for wildfire detections

Raw rows arrive as strings. Rows whose coordinates or timestamp cannot be
parsed are dropped without raising; the per-reason counts are returned as
stats so the loader can log them.
"""

import pandas as pd
import numpy as np
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple, Union
from .config import BOUNDS, COLUMNS, CONFIDENCE_LEVELS, DEFAULT_CONFIDENCE


class WildfireDetection(NamedTuple):
    """One satellite-observed hotspot"""
    timestamp: pd.Timestamp
    latitude: float
    longitude: float
    brightness: float
    radiative_power: float
    confidence: str


def detection_from_row(row: Union[pd.Series, Dict]) -> WildfireDetection:
    """Build a WildfireDetection from a row of the working set"""
    return WildfireDetection(
        timestamp=row['timestamp'],
        latitude=float(row['latitude']),
        longitude=float(row['longitude']),
        brightness=float(row['brightness']),
        radiative_power=float(row['radiative_power']),
        confidence=row['confidence']
    )


def empty_detections() -> pd.DataFrame:
    """A working set with no rows but the model's column dtypes"""
    return pd.DataFrame({
        'timestamp': pd.Series(dtype='datetime64[ns, UTC]'),
        'latitude': pd.Series(dtype=float),
        'longitude': pd.Series(dtype=float),
        'brightness': pd.Series(dtype=float),
        'radiative_power': pd.Series(dtype=float),
        'confidence': pd.Series(dtype=object)
    })


def validate_required_columns(df: pd.DataFrame) -> Tuple[bool, List[str]]:
    """
    Check if all required source columns are present

    Args:
        df: Input DataFrame with source column names

    Returns:
        Tuple of (validation result, list of missing columns)
    """
    missing_columns = [col for col in COLUMNS['required'] if col not in df.columns]
    return len(missing_columns) == 0, missing_columns


def standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename source columns to model names and drop everything else"""
    mapping = {k: v for k, v in COLUMNS['rename'].items() if k in df.columns}
    df = df[list(mapping)].rename(columns=mapping)
    if 'confidence' not in df.columns:
        df['confidence'] = None
    return df


def validate_coordinates(
    df: pd.DataFrame,
    lat_col: str = 'latitude',
    lon_col: str = 'longitude'
) -> Tuple[pd.DataFrame, Dict[str, int]]:
    """
    Validate geographic coordinates

    Args:
        df: Input DataFrame
        lat_col: Name of latitude column
        lon_col: Name of longitude column

    Returns:
        Tuple of (cleaned DataFrame, validation stats)
    """
    stats = {'original_rows': len(df)}

    df[lat_col] = pd.to_numeric(df[lat_col], errors='coerce').astype(float)
    df[lon_col] = pd.to_numeric(df[lon_col], errors='coerce').astype(float)

    # Non-numeric, missing and infinite coordinates
    valid_coords = np.isfinite(df[lat_col]) & np.isfinite(df[lon_col])
    df = df[valid_coords].copy()
    stats['invalid_coordinates'] = stats['original_rows'] - len(df)

    valid_bounds = (
        df[lat_col].between(BOUNDS['south'], BOUNDS['north']) &
        df[lon_col].between(BOUNDS['west'], BOUNDS['east'])
    )
    df = df[valid_bounds].copy()
    stats['out_of_bounds'] = stats['original_rows'] - stats['invalid_coordinates'] - len(df)

    return df, stats


def validate_dates(
    df: pd.DataFrame,
    date_col: str = 'timestamp'
) -> Tuple[pd.DataFrame, Dict[str, int]]:
    """
    Validate detection timestamps

    Timestamps are parsed as UTC. Strings without an offset are taken to be
    UTC already.

    Args:
        df: Input DataFrame
        date_col: Name of timestamp column

    Returns:
        Tuple of (cleaned DataFrame, validation stats)
    """
    stats = {'original_rows': len(df)}

    df[date_col] = pd.to_datetime(df[date_col], errors='coerce', utc=True, format='mixed')

    valid_dates = df[date_col].notna()
    df = df[valid_dates].copy()
    stats['invalid_dates'] = stats['original_rows'] - len(df)

    return df, stats


def validate_measurements(
    df: pd.DataFrame,
    columns: Tuple[str, ...] = ('brightness', 'radiative_power')
) -> Tuple[pd.DataFrame, Dict[str, int]]:
    """
    Coerce display measurements to floats

    Brightness and FRP only drive the visual encoding, so unparseable values
    become NaN and the row is kept.

    Args:
        df: Input DataFrame
        columns: Measurement columns to coerce

    Returns:
        Tuple of (DataFrame, count of non-finite values per column)
    """
    stats = {}
    for col in columns:
        values = pd.to_numeric(df[col], errors='coerce').astype(float)
        df[col] = values.where(np.isfinite(values))
        stats[f'missing_{col}'] = int(df[col].isna().sum())
    return df, stats


def normalize_confidence(df: pd.DataFrame, col: str = 'confidence') -> pd.DataFrame:
    """Map confidence codes to low/nominal/high, defaulting to nominal"""
    codes = df[col].astype('string').str.strip().str.lower()
    df[col] = codes.map(CONFIDENCE_LEVELS).fillna(DEFAULT_CONFIDENCE).astype(object)
    return df


def parse_detections(
    rows: Union[pd.DataFrame, Iterable[Dict[str, str]]]
) -> Tuple[pd.DataFrame, Dict[str, int]]:
    """
    Parse raw rows into the detection working set

    Args:
        rows: DataFrame of source strings, or an iterable of string-keyed rows

    Returns:
        Tuple of (detections DataFrame, parsing stats)

    Raises:
        ValueError: if a required source column is missing altogether
    """
    if isinstance(rows, pd.DataFrame):
        df = rows.copy()
    else:
        df = pd.DataFrame.from_records(list(rows))

    if df.empty and len(df.columns) == 0:
        return empty_detections(), {'original_rows': 0, 'parsed_rows': 0}

    valid, missing = validate_required_columns(df)
    if not valid:
        raise ValueError(f"Missing required columns: {missing}")

    stats = {'original_rows': len(df)}
    df = standardize_columns(df)

    df, coord_stats = validate_coordinates(df)
    df, date_stats = validate_dates(df)
    df, measurement_stats = validate_measurements(df)
    df = normalize_confidence(df)

    stats['invalid_coordinates'] = coord_stats['invalid_coordinates']
    stats['out_of_bounds'] = coord_stats['out_of_bounds']
    stats['invalid_dates'] = date_stats['invalid_dates']
    stats.update(measurement_stats)
    stats['parsed_rows'] = len(df)

    return df[COLUMNS['model']].reset_index(drop=True), stats


def parse_record(row: Dict[str, str]) -> Optional[WildfireDetection]:
    """
    Parse a single raw row

    Returns:
        The detection, or None if the row is rejected
    """
    df, _ = parse_detections([row])
    if df.empty:
        return None
    return detection_from_row(df.iloc[0])
