# core/plots.py
import html
from typing import Iterable
import pandas as pd
import plotly.graph_objects as go
from .grouping import count_by_age, names_by_age_sorted
from .models import Person

FIGURE_HEIGHT = 520

def build_age_distribution_figure(
    persons: Iterable[Person],
    title: str = "Persons by age",
    height: int = FIGURE_HEIGHT,
) -> go.Figure:
    """
    Bar chart: one bar per age (ascending), height = number of persons.
    Hover shows the distinct names for that age.
    """
    persons = list(persons)
    fig = go.Figure()

    # Light theme + fixed height
    fig.update_layout(
        title=title,
        xaxis_title="Age", yaxis_title="Persons",
        margin=dict(l=20, r=20, t=60, b=20),
        plot_bgcolor="#ffffff",
        paper_bgcolor="#ffffff",
        font=dict(color="#111111"),
        height=height,
    )

    if not persons:
        fig.update_yaxes(visible=False, showticklabels=False)
        return fig

    counts = count_by_age(persons)
    names = names_by_age_sorted(persons)
    df = pd.DataFrame([
        {"age": age, "count": counts[age], "names": ", ".join(names[age])}
        for age in sorted(counts)
    ])

    fig.add_trace(
        go.Bar(
            x=df["age"],
            y=df["count"],
            customdata=df[["names"]],
            hovertemplate="<b>%{x}</b>: %{y}<br>%{customdata[0]}<extra></extra>",
            marker=dict(color="#4C78A8"),
            showlegend=False,
        )
    )

    # Tick only on ages present in the data
    fig.update_xaxes(tickvals=df["age"].tolist())
    fig.update_yaxes(rangemode="tozero", dtick=1)
    return fig


def fig_to_html(fig: go.Figure, include_plotlyjs: bool = True, title: str = "Persons by age") -> str:
    """
    Full HTML page for the chart, saved by `persons-report --html`.
    The container takes the figure's own height so the bars never collapse
    to a 0px div when the page is opened from disk.
    """
    height = int(fig.layout.height or FIGURE_HEIGHT)
    inner = fig.to_html(
        full_html=False,
        include_plotlyjs=include_plotlyjs,
        config={"responsive": False, "displaylogo": False},
        default_height=f"{height}px",
        default_width="100%",
    )
    return (
        "<!doctype html>"
        f"<html><head><meta charset='utf-8'><title>{html.escape(title)}</title></head>"
        "<body style='background:#ffffff; color:#111111;'>"
        f"<div class='age-chart' style='height:{height}px;'>{inner}</div>"
        "</body></html>"
    )
