"""
Chart creation for the dietary-intake-by-age small multiples.
"""

from pathlib import Path
from typing import List, Optional

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from diet_by_age.config import LayoutConfig, get_layout
from diet_by_age.constants import (
    AGE_COLUMN,
    HTML_EXTENSIONS,
    IMAGE_EXTENSIONS,
    LEGEND_LABEL,
)
from diet_by_age.layout import LinearScale
from diet_by_age.pipeline import ChartModel
from diet_by_age.preparation import ColumnSummary, display_name


def peak_tooltip(summary: ColumnSummary) -> str:
    """Hover text for a peak marker."""
    return f"{display_name(summary.name)}<br>Age: {summary.peak_age:g}<extra></extra>"


def _x_domain(age_scale: LinearScale, layout: LayoutConfig) -> List[float]:
    """Horizontal extent of the charts as fractions of the plotting width."""
    inner_width = layout.width - layout.margin_left - layout.margin_right
    r0, r1 = age_scale.output_range
    start = (layout.label_width + min(r0, r1)) / inner_width
    end = (layout.label_width + max(r0, r1)) / inner_width
    return [max(0.0, min(start, 1.0)), max(0.0, min(end, 1.0))]


def _y_range(scale: LinearScale) -> List[float]:
    low, high = scale.domain
    if high == low:
        # Nothing to normalize against; keep a visible band
        return [low, low + 1.0]
    return [low, high]


def create_empty_chart(layout: LayoutConfig) -> go.Figure:
    """Placeholder figure when there are no nutrient columns to draw."""
    fig = go.Figure()
    fig.add_annotation(
        text="No nutrient columns to display<br>Check the exclusion list and marker",
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        xanchor="center",
        yanchor="middle",
        showarrow=False,
        font=dict(size=16, color="gray"),
    )
    fig.update_layout(
        title=layout.title,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        width=layout.width,
        height=layout.figure_height(0),
        template="plotly_white",
    )
    return fig


def _add_row(
    fig: go.Figure,
    model: ChartModel,
    summary: ColumnSummary,
    row: int,
    layout: LayoutConfig,
) -> None:
    col = summary.name
    records = model.records

    fig.add_trace(
        go.Scatter(
            x=records[AGE_COLUMN],
            y=records[col],
            mode="lines",
            line=dict(color=layout.line_color, width=1.25),
            opacity=0.5,
            connectgaps=False,
            hoverinfo="skip",
            showlegend=False,
            name=display_name(col),
        ),
        row=row,
        col=1,
    )

    if summary.peak_age is not None and summary.peak_value is not None:
        fig.add_trace(
            go.Scatter(
                x=[summary.peak_age],
                y=[summary.peak_value],
                mode="markers",
                marker=dict(
                    size=layout.marker_size,
                    color=model.color_scale(summary.peak_age),
                    line=dict(width=0),
                ),
                cliponaxis=False,
                hovertemplate=peak_tooltip(summary),
                showlegend=False,
                name=display_name(col),
            ),
            row=row,
            col=1,
        )

    fig.add_hline(
        y=0, row=row, col=1, line=dict(color=layout.grid_color, width=0.4)
    )

    yref = "y domain" if row == 1 else f"y{row} domain"
    fig.add_annotation(
        text=display_name(col),
        xref="paper",
        yref=yref,
        x=0,
        y=0,
        xanchor="left",
        yanchor="bottom",
        showarrow=False,
        font=dict(size=11),
    )
    fig.update_yaxes(
        range=_y_range(model.value_scales[col]),
        visible=False,
        fixedrange=True,
        row=row,
        col=1,
    )


def create_small_multiples_chart(
    model: ChartModel, layout: Optional[LayoutConfig] = None
) -> go.Figure:
    """One small chart per nutrient, stacked in peak-age order on a shared age axis."""
    layout = layout or get_layout()
    n_charts = len(model.ordering)
    if n_charts == 0:
        return create_empty_chart(layout)

    plot_height = n_charts * layout.row_pitch
    chart_span = abs(layout.value_range[0] - layout.value_range[1])
    gap = max(layout.row_pitch - chart_span, 0)
    vertical_spacing = min(gap / plot_height, 1 / max(n_charts - 1, 1))

    fig = make_subplots(
        rows=n_charts,
        cols=1,
        shared_xaxes=True,
        vertical_spacing=vertical_spacing,
    )

    for row, summary in enumerate(model.ordering, 1):
        _add_row(fig, model, summary, row, layout)

    tick_values = model.age_scale.ticks()
    fig.update_xaxes(
        range=list(model.age_scale.domain),
        domain=_x_domain(model.age_scale, layout),
        tickvals=tick_values,
        showgrid=True,
        gridcolor=layout.grid_color,
        gridwidth=0.4,
        zeroline=False,
        fixedrange=True,
    )
    # Shared age axis drawn above the first chart and below the last
    fig.update_xaxes(side="top", showticklabels=True, row=1, col=1)
    fig.update_xaxes(title_text="Age", showticklabels=True, row=n_charts, col=1)

    # Legend entry for the peak markers
    fig.add_trace(
        go.Scatter(
            x=[None],
            y=[None],
            mode="markers",
            marker=dict(size=layout.marker_size, color=layout.legend_color),
            name=LEGEND_LABEL,
            showlegend=True,
        ),
        row=n_charts,
        col=1,
    )

    fig.add_annotation(
        text=layout.source_note,
        xref="paper",
        yref="paper",
        x=0,
        y=0,
        yshift=-(layout.margin_bottom + layout.footer_height * 0.6),
        xanchor="left",
        yanchor="top",
        showarrow=False,
        font=dict(size=10, color="gray"),
    )

    fig.update_layout(
        title=dict(
            text=f"{layout.title}<br><sup>{layout.subtitle}</sup>",
            x=0,
            xanchor="left",
            y=1 - layout.margin_top / layout.figure_height(n_charts),
            yanchor="top",
        ),
        width=layout.width,
        height=layout.figure_height(n_charts),
        margin=dict(
            t=layout.margin_top + layout.title_margin,
            r=layout.margin_right,
            b=layout.margin_bottom + layout.footer_height,
            l=layout.margin_left,
        ),
        legend=dict(orientation="h", x=0, xanchor="left", y=0, yanchor="top"),
        font=dict(family=layout.font_family),
        hoverlabel=dict(bgcolor="white", bordercolor=layout.grid_color),
        template="plotly_white",
        plot_bgcolor="white",
    )
    return fig


def save_chart(fig: go.Figure, path: str, layout: Optional[LayoutConfig] = None) -> Path:
    """Write the figure as HTML or as a static image chosen by file extension."""
    layout = layout or get_layout()
    output = Path(path)
    suffix = output.suffix.lower()
    if suffix not in HTML_EXTENSIONS | IMAGE_EXTENSIONS:
        supported = ", ".join(sorted(HTML_EXTENSIONS | IMAGE_EXTENSIONS))
        raise ValueError(f"Unsupported output format '{suffix}' (use one of {supported})")

    output.parent.mkdir(parents=True, exist_ok=True)
    if suffix in HTML_EXTENSIONS:
        fig.write_html(output, include_plotlyjs="cdn")
        return output

    try:
        fig.write_image(output, width=layout.width, height=fig.layout.height)
    except Exception as exc:
        raise RuntimeError(
            f"Static export to {output} failed. Ensure kaleido is installed: {exc}"
        ) from exc
    return output
