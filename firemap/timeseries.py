"""
Brightness-over-time series for a single fire

The series for a clicked detection is built from every detection inside a
small bounding box around it. This box is independent of the rounded
location key used by the duration filter.
"""

import pandas as pd
import numpy as np
from typing import NamedTuple, Optional, Union
from .config import OBSERVATION_WINDOW, PROXIMITY_THRESHOLD, VIS_SETTINGS
from .processing import calendar_day
from .validators import WildfireDetection, detection_from_row


class SeriesAnnotation(NamedTuple):
    """Start, end and duration of a fire's brightness series"""
    start_day: pd.Timestamp
    end_day: pd.Timestamp
    span_days: int
    started_before_window: bool
    ended_after_window: bool

    def start_label(self) -> str:
        if self.started_before_window:
            return "Fire Start: started before Jun 1"
        return f"Fire Start: {self.start_day.strftime(VIS_SETTINGS['chart']['date_format'])}"

    def end_label(self) -> str:
        if self.ended_after_window:
            return "Fire End: ended after Aug 30"
        return f"Fire End: {self.end_day.strftime(VIS_SETTINGS['chart']['date_format'])}"

    def duration_label(self) -> str:
        long_fire_days = OBSERVATION_WINDOW['long_fire_days']
        if self.span_days >= long_fire_days:
            return f"Duration: over {long_fire_days} days"

        text = f"Duration: {self.span_days} day{'s' if self.span_days > 1 else ''}"
        if self.started_before_window or self.ended_after_window:
            text += " or more"
        return text

    def labels(self):
        return [self.start_label(), self.end_label(), self.duration_label()]


def nearby_detections(
    detections: pd.DataFrame,
    focal: Union[WildfireDetection, pd.Series],
    threshold: float = PROXIMITY_THRESHOLD
) -> pd.DataFrame:
    """
    Detections inside the bounding box around a focal detection

    Both the latitude and the longitude difference must be strictly below
    threshold. The result is sorted by timestamp; ties keep input order.

    Args:
        detections: Working set
        focal: The detection the series is built for
        threshold: Half-width of the box, in degrees

    Returns:
        Matching detections with a fresh index
    """
    in_box = (
        ((detections['latitude'] - focal.latitude).abs() < threshold) &
        ((detections['longitude'] - focal.longitude).abs() < threshold)
    )
    subset = detections[in_box]
    return subset.sort_values('timestamp', kind='mergesort').reset_index(drop=True)


def daily_mean_brightness(subset: pd.DataFrame) -> pd.DataFrame:
    """
    Average brightness per calendar day

    Non-finite brightness values are left out of the mean. A day with no
    finite value at all has nothing to plot and is left out of the series.

    Returns:
        DataFrame with day and brightness columns, ascending by day
    """
    brightness = subset['brightness'].astype(float)
    brightness = brightness.where(np.isfinite(brightness))
    frame = pd.DataFrame({
        'day': calendar_day(subset['timestamp']),
        'brightness': brightness
    }).dropna(subset=['brightness'])

    if frame.empty:
        return frame.reset_index(drop=True)

    series = frame.groupby('day', sort=True)['brightness'].mean()
    return series.reset_index()


def location_time_series(
    detections: pd.DataFrame,
    focal: Union[WildfireDetection, pd.Series],
    threshold: float = PROXIMITY_THRESHOLD
) -> pd.DataFrame:
    """Daily mean brightness of the detections around focal"""
    return daily_mean_brightness(nearby_detections(detections, focal, threshold))


def _is_day(day: pd.Timestamp, month_day) -> bool:
    month, day_of_month = month_day
    return day.month == month and day.day == day_of_month


def annotate_series(series: pd.DataFrame) -> Optional[SeriesAnnotation]:
    """
    Start/end/duration annotation for a daily brightness series

    Returns:
        The annotation, or None for an empty series
    """
    if series.empty:
        return None

    start_day = pd.Timestamp(series['day'].iloc[0])
    end_day = pd.Timestamp(series['day'].iloc[-1])

    return SeriesAnnotation(
        start_day=start_day,
        end_day=end_day,
        span_days=(end_day - start_day).days + 1,
        started_before_window=_is_day(start_day, OBSERVATION_WINDOW['first_day']),
        ended_after_window=_is_day(end_day, OBSERVATION_WINDOW['last_day'])
    )


def nearest_detection(
    detections: pd.DataFrame,
    latitude: float,
    longitude: float
) -> Optional[WildfireDetection]:
    """The detection closest to a point, in plain degree distance"""
    if detections.empty:
        return None
    distance = np.hypot(detections['latitude'] - latitude, detections['longitude'] - longitude)
    return detection_from_row(detections.loc[distance.idxmin()])
