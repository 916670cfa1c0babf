"""VolumeChart - Plotly bar chart of trade volume per route.

Bars are colored by risk level and sorted by volume (largest first).
Selected routes keep full opacity and get an outline; the rest fade when
anything is selected.
"""

import logging
from typing import Optional

import plotly.graph_objects as go

from tradeflow.constants import ChartConfig, StyleConfig
from tradeflow.model.catalog import TradeCatalog

logger = logging.getLogger(__name__)


class VolumeChart:
    """Renders route volumes using Plotly.

    Example:
        chart = VolumeChart(height=ChartConfig.VOLUME_CHART_HEIGHT)
        fig = chart.render(catalog=catalog, selected_ids={"route-1"})
        st.plotly_chart(fig)
    """

    def __init__(self, height: int = ChartConfig.VOLUME_CHART_HEIGHT, width: Optional[int] = None) -> None:
        """Initialize volume chart renderer.

        Args:
            height: Chart height in pixels
            width: Chart width in pixels (None = container width)
        """
        self.height = height
        self.width = width

    def render(self, catalog: TradeCatalog, selected_ids: set[str] | frozenset[str] = frozenset()) -> go.Figure:
        """Render the volume bar chart.

        Returns:
            Plotly Figure object.
        """
        routes = sorted(catalog.routes, key=lambda r: r.volume_usd_billions, reverse=True)
        has_selection = bool(selected_ids)

        opacities = [
            1.0 if (not has_selection or r.id in selected_ids) else ChartConfig.UNSELECTED_BAR_OPACITY for r in routes
        ]
        outline_widths = [2 if r.id in selected_ids else 0 for r in routes]

        fig = go.Figure(
            go.Bar(
                x=[r.name for r in routes],
                y=[r.volume_usd_billions for r in routes],
                customdata=[[r.risk_level.label, r.status.label, r.commodity] for r in routes],
                marker=dict(
                    color=[StyleConfig.RISK_COLORS_HEX[r.risk_level] for r in routes],
                    opacity=opacities,
                    line=dict(color=ChartConfig.SELECTED_BAR_OUTLINE, width=outline_widths),
                ),
                hovertemplate=(
                    "<b>%{x}</b><br>Volume: $%{y:.0f}B<br>Risk: %{customdata[0]}"
                    "<br>Status: %{customdata[1]}<br>%{customdata[2]}<extra></extra>"
                ),
            )
        )

        fig.update_layout(
            title=dict(text=f"Trade volume by route (total ${catalog.total_volume():.0f}B)", x=0.5),
            xaxis=dict(title=None, tickangle=-20),
            yaxis=dict(
                title="Volume (billion USD)",
                showgrid=True,
                gridcolor="rgba(200, 200, 200, 0.15)",
            ),
            showlegend=False,
            width=self.width,
            height=self.height,
            margin=dict(l=50, r=30, t=50, b=80),
            plot_bgcolor="rgba(0, 0, 0, 0)",
            paper_bgcolor="rgba(0, 0, 0, 0)",
        )
        return fig
