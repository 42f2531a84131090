import io
import datetime
import threading
from typing import List, Tuple

import matplotlib
matplotlib.use('Agg')  # Use a non-GUI backend
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import matplotlib.dates as mdates

from config.root_config import ChartConfig

# pyplot keeps global state; graph commands render from worker threads
_render_lock = threading.Lock()


def render_player_chart(window: List[Tuple[datetime.date, int]], label: str, title: str,
                        chart_cfg: ChartConfig = None) -> io.BytesIO:
    """
    Plot a daily player-count window as a line chart.
    Args:
        window (list): (date, count) pairs, oldest first.
        label (str): Legend label for the line.
        title (str): Chart title.
        chart_cfg (ChartConfig): Size and colours.
    Returns:
        BytesIO: PNG image, rewound to the start.
    """
    chart_cfg = chart_cfg or ChartConfig()
    dates = [day for day, _ in window]
    counts = [count for _, count in window]
    text_color = "white" if chart_cfg.dark_theme else "black"

    with _render_lock, plt.style.context('dark_background' if chart_cfg.dark_theme else 'default'):
        fig, ax = plt.subplots(figsize=chart_cfg.figsize)
        try:
            ax.plot(dates, counts, color=chart_cfg.line_color, marker="o", markersize=3, label=label, zorder=3)

            ax.set_title(title, color=text_color)
            ax.set_ylabel("Players Online", color=text_color)
            ax.set_ylim(bottom=0)
            ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
            # Long windows get unreadable with a tick per day
            locator = mdates.AutoDateLocator(maxticks=15)
            ax.xaxis.set_major_locator(locator)
            ax.xaxis.set_major_formatter(mdates.DateFormatter("%d.%m"))
            ax.tick_params(axis="x", labelrotation=45, colors=text_color)
            ax.tick_params(axis="y", colors=text_color)
            ax.grid(True, color="gray", alpha=0.3)
            ax.legend(facecolor="#2f3136" if chart_cfg.dark_theme else "white", edgecolor="none")
            fig.tight_layout()

            buffer = io.BytesIO()
            fig.savefig(buffer, format="png")
        finally:
            plt.close(fig)
    buffer.seek(0)
    return buffer
