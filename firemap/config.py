"""
Configuration settings for the firemap wildfire explorer
"""

from pathlib import Path
from typing import Dict

# Data paths
DATA_DIR = Path("data/final_data")
OUTPUT_DIR = Path("output")
DEFAULT_DATASET = DATA_DIR / "wildfires_combined.csv"

# File patterns
FILE_PATTERNS = {
    'csv_files': '**/*.csv'
}

# Valid coordinate ranges
BOUNDS = {
    'north': 90,
    'south': -90,
    'west': -180,
    'east': 180
}

# Column names and types
COLUMNS = {
    'required': [
        'datetime',
        'latitude',
        'longitude',
        'bright_ti4',
        'frp'
    ],
    'optional': [
        'confidence'
    ],
    # Source column -> model column
    'rename': {
        'datetime': 'timestamp',
        'latitude': 'latitude',
        'longitude': 'longitude',
        'bright_ti4': 'brightness',
        'frp': 'radiative_power',
        'confidence': 'confidence'
    },
    'model': [
        'timestamp',
        'latitude',
        'longitude',
        'brightness',
        'radiative_power',
        'confidence'
    ]
}

# Confidence codes as published by FIRMS (VIIRS uses single letters)
CONFIDENCE_LEVELS: Dict[str, str] = {
    'l': 'low',
    'n': 'nominal',
    'h': 'high',
    'low': 'low',
    'nominal': 'nominal',
    'high': 'high'
}
DEFAULT_CONFIDENCE = 'nominal'

# Duration filter: detections are grouped on rounded coordinates
LOCATION_KEY_DECIMALS = 2
MIN_DURATION_DAYS = 2

# Time series: bounding box around the clicked detection, in degrees
PROXIMITY_THRESHOLD = 0.05

# The observation window is truncated at both ends, so series touching
# these days may have started earlier or ended later
OBSERVATION_WINDOW = {
    'first_day': (5, 31),   # (month, day)
    'last_day': (8, 30),
    'long_fire_days': 92
}

# Reference boundaries drawn under the fire points
BOUNDARY_SOURCES = {
    'countries': 'https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson',
    'states': 'https://raw.githubusercontent.com/python-visualization/folium/master/examples/data/us-states.json'
}

# Countries are kept when their centroid falls inside this box
NORTH_AMERICA_CENTROID_BOX = {
    'west': -170,
    'east': -30,
    'south': 5,
    'north': 70
}

# Alaska and Hawaii are left off the state outlines
EXCLUDED_STATES: Dict[str, str] = {
    'AK': 'Alaska',
    'HI': 'Hawaii'
}

# Visualization settings
VIS_SETTINGS = {
    'map': {
        'default_zoom': 4,
        'default_center': [38, -98],
        'min_zoom': 3,
        'max_zoom': 12
    },
    'fire_markers': {
        'min_radius': 4,     # Radius range for the FRP scale, in pixels
        'max_radius': 20,
        'floor_radius': 3,
        'base_opacity': 0.8,
        'legend_frp_values': [50, 200, 500],
        'legend_fill': '#fc8d59'
    },
    'colors': {
        'brightness_bins': [200, 250, 300, 350, 400],
        'brightness_range': ['#fcffa4', '#f98e09', '#bc3754', '#57106e', '#000004'],
        'missing': '#bdbdbd',
        'country_fill': '#f8f8f8',
        'country_stroke': '#cccccc',
        'state_stroke': '#bbbbbb',
        'line': '#f03b20',
        'confidence': {
            'high': 'red',
            'nominal': 'orange',
            'low': 'yellow'
        }
    },
    'animation': {
        'transition_time': 400,  # milliseconds
        'period': 'P1D',         # one slider step per calendar day
        'duration': 'P1D'
    },
    'chart': {
        'figsize': (8, 5),
        'dpi': 100,
        'brightness_domain': (200, 400),
        'date_format': '%b %d',
        'scatter_padding': 1.1
    }
}

# Logging configuration
LOGGING = {
    'level': 'INFO',
    'format': '%(asctime)s - %(levelname)s - %(message)s',
    'file': None
}
