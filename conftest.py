"""
Shared fixtures for the firemap tests
"""

import pandas as pd
import pytest
from firemap.validators import parse_detections


@pytest.fixture
def make_row():
    """Factory for one raw CSV row of strings"""
    def _make_row(timestamp="2023-06-15 12:00:00", latitude="40.0", longitude="-120.0",
                  brightness="320.5", frp="12.3", confidence="n"):
        return {
            'datetime': timestamp,
            'latitude': latitude,
            'longitude': longitude,
            'bright_ti4': brightness,
            'frp': frp,
            'confidence': confidence
        }
    return _make_row


@pytest.fixture
def make_detections(make_row):
    """Factory for a parsed working set from (timestamp, lat, lon, brightness) tuples"""
    def _make_detections(records):
        rows = [
            make_row(timestamp=ts, latitude=str(lat), longitude=str(lon), brightness=str(bright))
            for ts, lat, lon, bright in records
        ]
        df, _ = parse_detections(rows)
        return df
    return _make_detections


@pytest.fixture
def sample_detections(make_detections):
    """Two persistent fires and one single-day hotspot"""
    return make_detections([
        # Fire A, three days
        ("2023-06-01 10:00:00", 40.001, -120.001, 300),
        ("2023-06-01 22:00:00", 40.002, -120.002, 310),
        ("2023-06-02 09:30:00", 40.003, -120.001, 330),
        ("2023-06-03 11:15:00", 40.001, -120.003, 350),
        # Fire B, two days
        ("2023-06-02 13:00:00", 35.500, -110.500, 280),
        ("2023-06-04 01:00:00", 35.501, -110.501, 290),
        # Single-day hotspot
        ("2023-06-03 15:00:00", 45.000, -100.000, 400),
        ("2023-06-03 16:00:00", 45.001, -100.001, 410),
    ])


@pytest.fixture
def csv_file(tmp_path, sample_detections):
    """Sample detections written back out in source format"""
    df = pd.DataFrame({
        'latitude': sample_detections['latitude'],
        'longitude': sample_detections['longitude'],
        'datetime': sample_detections['timestamp'].dt.strftime('%Y-%m-%d %H:%M:%S'),
        'bright_ti4': sample_detections['brightness'],
        'frp': [5.0, 10.0, 20.0, 40.0, 3.0, 6.0, 1.0, 2.0],
        'confidence': ['h', 'n', 'n', 'l', 'n', 'h', 'n', 'n'],
        'satellite': 'N'
    })
    path = tmp_path / "wildfires_combined.csv"
    df.to_csv(path, index=False)
    return path
