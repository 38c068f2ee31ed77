"""
Data Manager for the firemap wildfire explorer
Loads the detection dataset and the reference boundaries once per session
and hands out read-only copies of the filtered working set
"""

import pandas as pd
import geopandas as gpd
from pathlib import Path
import logging
from typing import Dict, NamedTuple, Optional, Union
from tqdm import tqdm
from .config import (
    BOUNDARY_SOURCES, DEFAULT_DATASET, EXCLUDED_STATES, FILE_PATTERNS,
    LOGGING, NORTH_AMERICA_CENTROID_BOX
)
from .day_index import DayIndex
from .processing import filter_by_duration
from .validators import parse_detections


class WorkingSet(NamedTuple):
    """Everything the renderers need, loaded once"""
    detections: pd.DataFrame
    day_index: DayIndex
    countries: Optional[gpd.GeoDataFrame]
    states: Optional[gpd.GeoDataFrame]


def configure_logging(settings: Dict = LOGGING) -> None:
    """Configure root logging from the LOGGING settings"""
    handlers = [logging.StreamHandler()]
    if settings.get('file'):
        Path(settings['file']).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings['file']))

    logging.basicConfig(
        level=getattr(logging, settings['level']),
        format=settings['format'],
        handlers=handlers
    )


def filter_north_america(countries: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Keep countries whose centroid lies inside the North America box"""
    # Centroids are taken in an equal-area projection, then brought back
    centroids = countries.geometry.to_crs("EPSG:6933").centroid.to_crs("EPSG:4326")
    box = NORTH_AMERICA_CENTROID_BOX
    inside = (
        (centroids.x > box['west']) & (centroids.x < box['east']) &
        (centroids.y > box['south']) & (centroids.y < box['north'])
    )
    return countries[inside.values].reset_index(drop=True)


def filter_contiguous_states(states: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """Drop Alaska and Hawaii from the state outlines"""
    excluded = pd.Series(False, index=states.index)
    if 'id' in states.columns:
        excluded |= states['id'].isin(list(EXCLUDED_STATES))
    if 'name' in states.columns:
        excluded |= states['name'].isin(list(EXCLUDED_STATES.values()))
    return states[~excluded].reset_index(drop=True)


class DataManager:
    def __init__(
        self,
        data_path: Union[str, Path] = DEFAULT_DATASET,
        boundary_sources: Optional[Dict[str, str]] = None
    ):
        """
        Initialize DataManager

        Args:
            data_path: A detection CSV file, or a directory of CSV files
            boundary_sources: Paths or URLs of the 'countries' and 'states'
                boundary files. Defaults to BOUNDARY_SOURCES.
        """
        self.data_path = Path(data_path)
        self.boundary_sources = boundary_sources or BOUNDARY_SOURCES
        self.raw_data = None
        self.parse_stats = None
        self._detections = None
        self.countries_gdf = None
        self.states_gdf = None

        configure_logging()

    def _read_boundary(self, name: str) -> Optional[gpd.GeoDataFrame]:
        source = self.boundary_sources.get(name)
        if not source:
            logging.warning(f"No {name} boundary source configured")
            return None
        try:
            gdf = gpd.read_file(source)
            return gdf.to_crs("EPSG:4326")  # Ensure correct projection
        except Exception as e:
            logging.error(f"Error loading {name} boundaries: {e}")
            return None

    def load_boundaries(self) -> None:
        """Load country and state outlines for the base map"""
        countries = self._read_boundary('countries')
        if countries is not None:
            countries = filter_north_america(countries)
            logging.info(f"Loaded {len(countries)} country outlines")
        self.countries_gdf = countries

        states = self._read_boundary('states')
        if states is not None:
            states = filter_contiguous_states(states)
            logging.info(f"Loaded {len(states)} state outlines")
        self.states_gdf = states

    def load_raw_data(self) -> None:
        """Read detection rows as strings from the CSV file(s)"""
        if self.data_path.is_dir():
            csv_files = sorted(self.data_path.glob(FILE_PATTERNS['csv_files']))
            if not csv_files:
                raise FileNotFoundError(f"No CSV files found in {self.data_path}")

            logging.info(f"Found {len(csv_files)} CSV files")
            all_data = [
                pd.read_csv(file_path, dtype=str)
                for file_path in tqdm(csv_files, desc="Reading CSV files")
            ]
            self.raw_data = pd.concat(all_data, ignore_index=True)
        else:
            if not self.data_path.exists():
                raise FileNotFoundError(f"Dataset not found: {self.data_path}")
            self.raw_data = pd.read_csv(self.data_path, dtype=str)

        logging.info(f"Loaded {len(self.raw_data):,} raw records")

    def clean_data(self) -> None:
        """Parse raw rows and apply the duration filter"""
        if self.raw_data is None:
            raise ValueError("No raw data loaded. Call load_raw_data() first.")

        logging.info("Parsing detections...")
        parsed, self.parse_stats = parse_detections(self.raw_data)
        dropped = self.parse_stats['original_rows'] - self.parse_stats['parsed_rows']
        if dropped > 0:
            logging.warning(
                f"Dropped {dropped:,} unparseable rows "
                f"(coordinates: {self.parse_stats['invalid_coordinates']:,}, "
                f"out of bounds: {self.parse_stats['out_of_bounds']:,}, "
                f"dates: {self.parse_stats['invalid_dates']:,})"
            )

        self._detections = filter_by_duration(parsed)
        logging.info(
            f"Duration filter kept {len(self._detections):,} of {len(parsed):,} detections"
        )

    def get_detections(self) -> pd.DataFrame:
        """
        Get the filtered detections

        Returns:
            A copy of the working set; the manager's own frame never changes
        """
        if self._detections is None:
            raise ValueError("No processed data available. Run clean_data() first.")
        return self._detections.copy()

    def load(self, include_boundaries: bool = True) -> WorkingSet:
        """
        Run the whole one-time load

        Returns once the dataset and both boundary files have been read.

        Args:
            include_boundaries: Skip the boundary downloads when False
        """
        self.load_raw_data()
        self.clean_data()
        if include_boundaries:
            self.load_boundaries()

        detections = self.get_detections()
        return WorkingSet(
            detections=detections,
            day_index=DayIndex(detections),
            countries=self.countries_gdf,
            states=self.states_gdf
        )
