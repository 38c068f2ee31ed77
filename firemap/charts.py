"""
Static charts: brightness over time for one fire, and FRP against brightness
"""

import matplotlib.dates as mdates
from matplotlib.figure import Figure
import seaborn as sns
import pandas as pd
from pathlib import Path
from typing import Optional, Union
from .config import VIS_SETTINGS
from .timeseries import SeriesAnnotation


def _new_figure() -> Figure:
    chart = VIS_SETTINGS['chart']
    return Figure(figsize=chart['figsize'], dpi=chart['dpi'])


def _save(fig: Figure, output_file: Optional[Union[str, Path]]) -> None:
    if output_file is None:
        return
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, bbox_inches='tight')


def plot_brightness_series(
    series: pd.DataFrame,
    annotation: SeriesAnnotation,
    output_file: Optional[Union[str, Path]] = None
) -> Figure:
    """
    Plot daily mean brightness with the start/end/duration annotation

    A single day is drawn as one marker instead of a line.

    Args:
        series: Output of location_time_series
        annotation: Output of annotate_series for the same series
        output_file: Where to save the PNG; nothing is written when None
    """
    chart = VIS_SETTINGS['chart']
    line_color = VIS_SETTINGS['colors']['line']

    fig = _new_figure()
    ax = fig.subplots()

    days = series['day'].dt.tz_localize(None) if series['day'].dt.tz else series['day']
    if len(series) > 1:
        ax.plot(days, series['brightness'], color=line_color, linewidth=2)
    else:
        ax.plot(days, series['brightness'], 'o', color=line_color, markersize=4)
        # Pad a lone day by one day on each side
        day = days.iloc[0]
        ax.set_xlim(day - pd.Timedelta(days=1), day + pd.Timedelta(days=1))

    ax.set_ylim(*chart['brightness_domain'])
    ax.xaxis.set_major_locator(mdates.AutoDateLocator(maxticks=6))
    ax.xaxis.set_major_formatter(mdates.DateFormatter(chart['date_format']))
    for label in ax.get_xticklabels():
        label.set_rotation(20)
        label.set_horizontalalignment('right')

    ax.set_xlabel('Date')
    ax.set_ylabel('Brightness (TI4)')
    ax.set_title('Fire Brightness Over Time', fontweight='bold')

    ax.text(
        0.5, 0.2, "\n".join(annotation.labels()),
        transform=ax.transAxes,
        ha='center', va='center',
        fontsize=12, fontweight='bold'
    )

    _save(fig, output_file)
    return fig


def plot_scatter(
    detections: pd.DataFrame,
    output_file: Optional[Union[str, Path]] = None
) -> Figure:
    """
    Scatter plot of fire radiative power against brightness

    Points are colored by confidence level.

    Args:
        detections: Working set
        output_file: Where to save the PNG; nothing is written when None
    """
    padding = VIS_SETTINGS['chart']['scatter_padding']
    palette = VIS_SETTINGS['colors']['confidence']

    fig = _new_figure()
    ax = fig.subplots()

    plotted = detections.dropna(subset=['radiative_power', 'brightness'])
    if not plotted.empty:
        sns.scatterplot(
            data=plotted,
            x='radiative_power',
            y='brightness',
            hue='confidence',
            hue_order=['high', 'nominal', 'low'],
            palette=palette,
            alpha=0.7,
            s=30,
            ax=ax
        )
        ax.set_xlim(0, max(plotted['radiative_power'].max(), 0) * padding or 1)
        ax.set_ylim(0, max(plotted['brightness'].max(), 0) * padding or 1)
        if ax.get_legend() is not None:
            ax.get_legend().set_title('Confidence')

    ax.set_xlabel('FRP (MW)', fontweight='bold')
    ax.set_ylabel('Brightness', fontweight='bold')

    _save(fig, output_file)
    return fig
