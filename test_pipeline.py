"""
Test script to verify the data pipeline functionality end to end
"""

import logging
from create_fire_map import main
from firemap.data_manager import DataManager
from firemap.processing import calendar_day, location_duration_days


def test_pipeline(csv_file):
    """Test the complete data pipeline"""
    logging.info("Starting pipeline test...")

    dm = DataManager(csv_file)

    logging.info("Testing data loading...")
    dm.load_raw_data()
    assert dm.raw_data is not None, "Failed to load raw data"

    logging.info("Testing data cleaning...")
    dm.clean_data()
    detections = dm.get_detections()
    assert len(detections) > 0, "Failed to clean data"

    # Verify model columns
    required_cols = [
        'timestamp', 'latitude', 'longitude',
        'brightness', 'radiative_power', 'confidence'
    ]
    missing_cols = [col for col in required_cols if col not in detections.columns]
    assert not missing_cols, f"Missing required columns: {missing_cols}"

    # Verify data quality
    assert not detections['latitude'].isna().any(), "Found null latitudes"
    assert not detections['longitude'].isna().any(), "Found null longitudes"
    assert not detections['timestamp'].isna().any(), "Found null dates"
    assert detections['latitude'].between(-90, 90).all(), "Invalid latitude range"
    assert detections['longitude'].between(-180, 180).all(), "Invalid longitude range"
    assert (location_duration_days(detections) > 1).all(), "Single-day location survived"

    logging.info("Testing working set...")
    working_set = dm.load(include_boundaries=False)
    assert set(working_set.day_index.days) == set(calendar_day(working_set.detections['timestamp']))

    logging.info("Pipeline test completed successfully!")


def test_script_writes_all_outputs(tmp_path, csv_file):
    map_file = tmp_path / "fire_map.html"
    chart_file = tmp_path / "fire_chart.png"
    scatter_file = tmp_path / "scatter.png"

    main([
        '--data', str(csv_file),
        '--output', str(map_file),
        '--focal', '40.0', '-120.0',
        '--chart', str(chart_file),
        '--scatter', str(scatter_file),
        '--no-boundaries'
    ])

    assert map_file.exists()
    assert chart_file.exists()
    assert scatter_file.exists()
