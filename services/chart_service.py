"""
services/chart_service.py
--------------------------
Renders the category spend breakdown as a pie chart.
Uses matplotlib and returns the PNG in a BytesIO buffer.
"""

import io

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for server use
import matplotlib.pyplot as plt
import matplotlib.font_manager as fm

from services.spend_service import CategorySpend
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)

# Category names are Japanese; prefer a CJK-capable font
_CJK_FONTS = ["Noto Sans CJK JP", "IPAexGothic", "IPAGothic", "Hiragino Sans", "Yu Gothic", "TakaoGothic"]
_font_found = False
for _f in _CJK_FONTS:
    if any(_f.lower() in f.name.lower() for f in fm.fontManager.ttflist):
        plt.rcParams["font.family"] = _f
        _font_found = True
        break

if not _font_found:
    plt.rcParams["font.family"] = "DejaVu Sans"

_COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8", "#82ca9d"]


class ChartService:
    """Generates the monthly spend-by-category chart."""

    def generate_category_pie(self, breakdown: list[CategorySpend]) -> io.BytesIO | None:
        """
        Generate a pie chart of monthly-equivalent spend per category.

        Args:
            breakdown: Output of spend_service.by_category().

        Returns:
            BytesIO buffer with PNG image, or None if there is nothing to plot.
        """
        if not breakdown:
            return None

        labels = [item.category.value for item in breakdown]
        values = [item.amount for item in breakdown]
        total = sum(values)

        fig, ax = plt.subplots(figsize=(8, 6))

        wedges, texts, autotexts = ax.pie(
            values,
            labels=labels,
            autopct=lambda pct: f"{pct:.0f}%",
            colors=[_COLORS[i % len(_COLORS)] for i in range(len(values))],
            startangle=90,
            wedgeprops=dict(edgecolor="white", linewidth=1.5),
        )

        for autotext in autotexts:
            autotext.set_color("white")
            autotext.set_fontweight("bold")

        legend_labels = [f"{l}: {format_currency(v)}" for l, v in zip(labels, values)]
        ax.legend(
            wedges, legend_labels,
            loc="center left",
            bbox_to_anchor=(1, 0, 0.5, 1),
            frameon=False,
        )
        ax.set_title(
            f"カテゴリ別支出（月額）\n合計: {format_currency(total)}",
            fontsize=14,
            fontweight="bold",
        )
        ax.axis("equal")

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=120, bbox_inches="tight")
        buf.seek(0)
        plt.close(fig)

        logger.info(f"Generated category pie chart with {len(values)} slices")
        return buf
