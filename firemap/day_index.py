"""
Ordered timeline of the calendar days present in a set of detections
"""

import pandas as pd
from typing import Tuple, Union
from .processing import calendar_day
from .validators import WildfireDetection


class DayIndex:
    """
    Distinct calendar days of a detection set, ascending

    Drives the map's time slider. Positions run from 0 to day_count() - 1;
    callers are expected to clamp slider values before asking for a day.
    """

    def __init__(self, detections: pd.DataFrame):
        self._detections = detections
        self._day_of_row = calendar_day(detections['timestamp'])
        self.days: Tuple[pd.Timestamp, ...] = tuple(
            pd.Timestamp(day) for day in sorted(self._day_of_row.unique())
        )

    def __len__(self) -> int:
        return len(self.days)

    def day_count(self) -> int:
        return len(self.days)

    def day_at(self, index: int) -> pd.Timestamp:
        """
        Day at a slider position

        Raises:
            IndexError: if index is outside [0, day_count() - 1]. Negative
                positions are rejected rather than counted from the end.
        """
        if not 0 <= index < len(self.days):
            raise IndexError(
                f"Day index {index} out of range [0, {len(self.days) - 1}]"
            )
        return self.days[index]

    def clamp(self, index: int) -> int:
        """Clamp a slider value to a valid position"""
        if not self.days:
            raise IndexError("Day index is empty")
        return max(0, min(int(index), len(self.days) - 1))

    @staticmethod
    def is_on_day(
        detection: Union[WildfireDetection, pd.Series],
        day: pd.Timestamp
    ) -> bool:
        """True when the detection's truncated timestamp equals day exactly"""
        return pd.Timestamp(detection.timestamp).floor('D') == day

    def select_day(self, index: int) -> pd.DataFrame:
        """Detections that fall on the day at the given position"""
        day = self.day_at(index)
        return self._detections[self._day_of_row == day].copy()
