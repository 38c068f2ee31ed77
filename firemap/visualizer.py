"""
Visualization module for the firemap wildfire explorer
Creates the interactive day-by-day map of wildfire detections
"""

import folium
from folium.plugins import TimestampedGeoJson
from branca.colormap import StepColormap
import pandas as pd
import numpy as np
from pathlib import Path
import logging
from typing import Callable, Dict, List, Optional, Union
from .config import VIS_SETTINGS
from .data_manager import WorkingSet
from .charts import plot_brightness_series
from .timeseries import annotate_series, daily_mean_brightness, nearby_detections
from .validators import WildfireDetection


def brightness_color(value: float) -> str:
    """
    Threshold color scale on brightness

    Values below the second bin get the first color, values at or above the
    last bin get the last color.
    """
    if value is None or not np.isfinite(value):
        return VIS_SETTINGS['colors']['missing']
    bins = VIS_SETTINGS['colors']['brightness_bins'][1:]
    colors = VIS_SETTINGS['colors']['brightness_range']
    return colors[int(np.searchsorted(bins, value, side='right'))]


def frp_radius_scale(frp: pd.Series) -> Callable[[float], float]:
    """
    Square-root scale from the FRP extent to marker radii

    Returns:
        Function mapping an FRP value to a radius in pixels
    """
    markers = VIS_SETTINGS['fire_markers']
    r0, r1 = markers['min_radius'], markers['max_radius']
    finite = frp[np.isfinite(frp)]
    if finite.empty:
        return lambda value: float(markers['floor_radius'])

    d0, d1 = np.sqrt(max(finite.min(), 0)), np.sqrt(max(finite.max(), 0))

    def radius(value: float) -> float:
        if value is None or not np.isfinite(value):
            return float(markers['floor_radius'])
        if d1 == d0:
            t = 0.5
        else:
            t = (np.sqrt(max(value, 0)) - d0) / (d1 - d0)
        return float(max(r0 + t * (r1 - r0), markers['floor_radius']))

    return radius


def _format_measurement(value: float) -> str:
    return f"{value:g}" if np.isfinite(value) else "n/a"


def brightness_legend() -> StepColormap:
    """Step color legend matching brightness_color"""
    bins = VIS_SETTINGS['colors']['brightness_bins']
    step = bins[1] - bins[0]
    return StepColormap(
        colors=VIS_SETTINGS['colors']['brightness_range'],
        index=bins + [bins[-1] + step],
        vmin=bins[0],
        vmax=bins[-1] + step,
        caption='Brightness (TI4)'
    )


def frp_size_legend(radius: Callable[[float], float]) -> folium.Element:
    """
    Size legend for fire radiative power

    Draws one circle per reference FRP value with the same radius scale as
    the map markers.

    Args:
        radius: Output of frp_radius_scale for the plotted detections
    """
    markers = VIS_SETTINGS['fire_markers']
    spacing = 40
    rows = []
    for i, value in enumerate(markers['legend_frp_values']):
        r = radius(value)
        cy = i * spacing + r
        rows.append(
            f'<circle cx="20" cy="{cy:.1f}" r="{r:.1f}" '
            f'fill="{markers["legend_fill"]}" opacity="0.7"></circle>'
            f'<text x="50" y="{cy:.1f}" dominant-baseline="middle" '
            f'font-size="12">FRP: {value}</text>'
        )
    height = len(markers['legend_frp_values']) * spacing + markers['max_radius']

    legend_html = f'''
        <div id="frp-size-legend" style="position: fixed;
            bottom: 40px; right: 20px; z-index: 9999;
            background-color: white; opacity: 0.85; padding: 8px;
            border: 1px solid #cccccc; font-family: Arial; font-size: 12px;">
            <b>Fire Intensity (FRP)</b><br>
            <svg width="110" height="{height}">{''.join(rows)}</svg>
        </div>
    '''
    return folium.Element(legend_html)


class FireMapVisualizer:
    def __init__(self, working_set: WorkingSet):
        """
        Initialize the visualizer

        Args:
            working_set: Loaded detections, day index and boundaries
        """
        self.working_set = working_set
        self.map = None
        self.radius = frp_radius_scale(working_set.detections['radiative_power'])

    def _create_base_map(self) -> folium.Map:
        """Create the base map with initial configuration"""
        m = folium.Map(
            location=VIS_SETTINGS['map']['default_center'],
            zoom_start=VIS_SETTINGS['map']['default_zoom'],
            tiles='cartodbpositron',
            min_zoom=VIS_SETTINGS['map']['min_zoom'],
            max_zoom=VIS_SETTINGS['map']['max_zoom']
        )
        self._add_boundaries(m)
        return m

    def _add_boundaries(self, m: folium.Map) -> None:
        """Add country and state outlines for context"""
        colors = VIS_SETTINGS['colors']
        if self.working_set.countries is not None:
            folium.GeoJson(
                self.working_set.countries.to_json(),
                name='Countries',
                style_function=lambda x: {
                    'fillColor': colors['country_fill'],
                    'color': colors['country_stroke'],
                    'weight': 0.5,
                    'fillOpacity': 0.5
                }
            ).add_to(m)

        if self.working_set.states is not None:
            folium.GeoJson(
                self.working_set.states.to_json(),
                name='States',
                style_function=lambda x: {
                    'fillColor': 'transparent',
                    'color': colors['state_stroke'],
                    'weight': 0.4
                }
            ).add_to(m)

    def create_fire_feature(
        self,
        detection: Union[WildfireDetection, pd.Series],
        day: pd.Timestamp
    ) -> Dict:
        """Create a GeoJSON point feature for a detection shown on day"""
        color = brightness_color(detection.brightness)
        return {
            'type': 'Feature',
            'geometry': {
                'type': 'Point',
                'coordinates': [float(detection.longitude), float(detection.latitude)]
            },
            'properties': {
                'time': day.strftime('%Y-%m-%d'),
                'style': {
                    'color': color,
                    'fillColor': color,
                    'fillOpacity': VIS_SETTINGS['fire_markers']['base_opacity'],
                    'weight': 1,
                    'radius': self.radius(detection.radiative_power)
                },
                'icon': 'circle',
                'popup': (
                    f"<div style='font-family: Arial; font-size: 12px;'>"
                    f"Brightness (TI4): {_format_measurement(detection.brightness)}<br>"
                    f"Fire Intensity (FRP): {_format_measurement(detection.radiative_power)}<br>"
                    f"{pd.Timestamp(detection.timestamp):%Y-%m-%d %H:%M} UTC"
                    f"</div>"
                )
            }
        }

    def build_features(self) -> List[Dict]:
        """One feature per detection, grouped by slider day"""
        day_index = self.working_set.day_index
        features = []
        for position in range(day_index.day_count()):
            day = day_index.day_at(position)
            day_data = day_index.select_day(position)
            features.extend(
                self.create_fire_feature(row, day)
                for row in day_data.itertuples(index=False)
            )
        return features

    def create_visualization(self, output_file: str = "fire_map.html") -> folium.Map:
        """
        Create the interactive day-by-day fire map

        Args:
            output_file: Path to save the output HTML file
        """
        logging.info("Creating visualization...")
        day_index = self.working_set.day_index
        logging.info(
            f"Processing {len(self.working_set.detections):,} detections "
            f"over {day_index.day_count()} days"
        )

        self.map = self._create_base_map()

        features = self.build_features()
        logging.info(f"Created {len(features)} visualization features")

        if features:
            TimestampedGeoJson(
                {
                    'type': 'FeatureCollection',
                    'features': features
                },
                period=VIS_SETTINGS['animation']['period'],
                duration=VIS_SETTINGS['animation']['duration'],
                transition_time=VIS_SETTINGS['animation']['transition_time'],
                auto_play=False,
                loop=False,
                date_options='YYYY-MM-DD'
            ).add_to(self.map)
        else:
            logging.warning("No detections survived filtering; map has no fire layer")

        brightness_legend().add_to(self.map)
        self.map.get_root().html.add_child(frp_size_legend(self.radius))
        folium.LayerControl().add_to(self.map)

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logging.info(f"Saving visualization to {output_file}...")
        self.map.save(str(output_path))
        logging.info("Visualization created successfully!")
        return self.map

    def create_fire_chart(
        self,
        focal: Union[WildfireDetection, pd.Series],
        output_file: str = "fire_chart.png"
    ) -> Optional[Path]:
        """
        Draw the brightness-over-time chart for a focal detection

        Returns:
            Path of the saved chart, or None when there is nothing to chart
        """
        nearby = nearby_detections(self.working_set.detections, focal)
        if nearby.empty:
            logging.info("No nearby detections to chart")
            return None

        series = daily_mean_brightness(nearby)
        annotation = annotate_series(series)
        if annotation is None:
            logging.info("No finite brightness near the selected detection to chart")
            return None

        logging.info(" / ".join(annotation.labels()))
        plot_brightness_series(series, annotation, output_file)
        logging.info(f"Saved brightness chart to {output_file}")
        return Path(output_file)
