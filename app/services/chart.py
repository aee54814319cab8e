import io
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from app.errors import ValidationError

SERIES_KEY = "student"
BAR_COLOR = "#0770e0"
TITLE = "Bar Chart - Late Students"
FOOTER_CAPTION = "Showing total late students for the last 6 months"

DEFAULT_SERIES = [
    {"month": "January", SERIES_KEY: 186},
    {"month": "February", SERIES_KEY: 305},
    {"month": "March", SERIES_KEY: 237},
    {"month": "April", SERIES_KEY: 73},
    {"month": "May", SERIES_KEY: 209},
    {"month": "June", SERIES_KEY: 214},
]


@dataclass(frozen=True)
class BarChart:
    title: str
    description: str
    months: List[str]
    tick_labels: List[str]
    values: List[int]
    total: int
    style: str

    @property
    def footer(self) -> str:
        return f"Total Students : {self.total}"

    @property
    def caption(self) -> str:
        return FOOTER_CAPTION


def available_styles() -> List[str]:
    return ["default", *plt.style.available]


def validate_style(class_name: str) -> None:
    if class_name not in available_styles():
        raise ValidationError({"class_name": [f"Unknown chart style '{class_name}'."]})


def build_chart(
    items: Optional[Sequence[Dict[str, Any]]] = None,
    class_name: str = "default",
    series_key: str = SERIES_KEY,
) -> BarChart:
    """Lay out a bar chart for a ``{month, <series_key>}`` series.

    Falls back to the sample series when ``items`` is None or empty.
    ``class_name`` picks the matplotlib style sheet used by ``render_png``.
    """
    validate_style(class_name)

    data = list(items) if items else DEFAULT_SERIES
    if not items:
        series_key = SERIES_KEY

    months = [str(point["month"]) for point in data]
    values = [int(point[series_key]) for point in data]

    return BarChart(
        title=TITLE,
        description=f"{months[0]} - {months[-1]}",
        months=months,
        tick_labels=[month[:3] for month in months],
        values=values,
        total=sum(values),
        style=class_name,
    )


def render_png(chart: BarChart) -> io.BytesIO:
    with plt.style.context(chart.style):
        fig, ax = plt.subplots(figsize=(6.0, 3.6))
        try:
            bars = ax.bar(chart.tick_labels, chart.values, color=BAR_COLOR)
            ax.bar_label(bars, padding=4, fontsize=9)
            ax.set_title(f"{chart.title}\n{chart.description}", fontsize=10)
            ax.grid(axis="y", alpha=0.3)
            ax.spines[["top", "right", "left"]].set_visible(False)
            ax.tick_params(axis="x", length=0, labelsize=9)
            ax.tick_params(axis="y", labelsize=8)
            ax.margins(y=0.15)
            fig.text(0.01, 0.02, f"{chart.footer}    {chart.caption}", fontsize=8)
            fig.tight_layout(rect=(0, 0.06, 1, 1))

            buffer = io.BytesIO()
            fig.savefig(buffer, format="png", dpi=150)
        finally:
            plt.close(fig)
    buffer.seek(0)
    return buffer
