"""
Streamlit UI for the Film Explorer.
Loads the film table once, exposes the filter controls, draws a brushable
scatter of the chosen metric against rating, and keeps the results table in
sync with the filtered view and the brush selection.

Run UI:                streamlit run streamlit_app.py
"""

import asyncio  # drive the one-shot async load
from typing import Optional  # indicates values can be None

# Altair builds the Vega-Lite scatter; pandas feeds it and the table
import altair as alt  # declarative charts
import pandas as pd  # tabular frames for chart and table
# Streamlit framework to build the interactive UI
import streamlit as st  # UI primitives

# Console logging
from loguru import logger  # console logger

# Local imports: loading, session/state transitions, display helpers
from film_explorer.chart import ChartFrame, ChartLayout
from film_explorer.config import ALL_DIRECTORS, AXIS_TICKS, DATA_PATH
from film_explorer.data_loader import DataLoader
from film_explorer.filters import METRIC_LABELS, metric_value
from film_explorer.formatting import PLACEHOLDER, table_rows, tooltip_rows
from film_explorer.models import BrushRect, FilterParams, Metric
from film_explorer.selection import point_opacities
from film_explorer.session import BrushChanged, DashboardSession, FilterChanged, SessionPhase

BRUSH_NAME = "brush"  # Altair interval selection parameter

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Film Explorer", layout="wide")  # wide layout

# Main page title
st.title("Film Explorer")  # header


def _log_render(state, overlay):
	"""Render hook: Streamlit redraws from session state on every rerun."""
	logger.debug(f"[UI] render pass | films={state.result.count} | overlay={overlay.id}")


def init_session() -> DashboardSession:
	"""Create the per-user session and run the one-shot load."""
	loader = DataLoader()  # create loader
	session = DashboardSession(loader.load_films, render=_log_render, layout=ChartLayout())
	asyncio.run(session.load(DATA_PATH))  # terminal FAILED on error, never retried
	return session


# One session per browser session; loading happens only on the first run
if "session" not in st.session_state:
	with st.spinner("Loading films..."):
		st.session_state["session"] = init_session()
session: DashboardSession = st.session_state["session"]
st.session_state.setdefault("chart_generation", 0)

# Load failure is terminal: show the error and render nothing else
if session.phase != SessionPhase.READY:
	message, _ = session.status
	st.error(message)
	st.stop()

dataset = session.state.dataset
year_lo, year_hi = dataset.year_bounds

# Sidebar contains the filter controls
with st.sidebar:
	st.header("Filters")  # section label
	metric_keys = [m.value for m in Metric]
	x_metric = st.selectbox(
		"X axis",
		metric_keys,
		index=metric_keys.index(session.state.params.x_metric),
		format_func=lambda k: METRIC_LABELS[k],
	)
	director_options = [ALL_DIRECTORS] + list(dataset.directors)
	director = st.selectbox(
		"Director",
		director_options,
		format_func=lambda d: "All" if d == ALL_DIRECTORS else d,
	)
	if year_lo < year_hi:
		# Independent sliders; an inverted pair is corrected by the filter engine
		min_year = st.slider("Min year", year_lo, year_hi, value=year_lo)
		max_year = st.slider("Max year", year_lo, year_hi, value=year_hi)
	else:
		min_year = max_year = year_lo  # single year in the data
	st.caption(f"Years: {session.state.result.min_year} – {session.state.result.max_year}")

# Any control change replaces the filter parameters (and clears the brush)
params = FilterParams(director=director, min_year=int(min_year), max_year=int(max_year), x_metric=x_metric)
if params != session.state.params:
	session.dispatch(FilterChanged(params))
	st.session_state["chart_generation"] += 1  # fresh chart widget, so no stale brush
	st.rerun()  # redraw with the corrected year labels and a fresh chart


def build_chart(frame: ChartFrame, brush: Optional[BrushRect]) -> alt.Chart:
	"""Scatter with fixed domains taken from the frame's scales."""
	opacities = point_opacities(
		[p.record for p in frame.points], brush, frame.x_scale, frame.y_scale, frame.metric,
	)
	rows = []  # one row per plotted point
	for p, opacity in zip(frame.points, opacities):
		heading, tip = tooltip_rows(p.record)  # formatted tooltip fields
		rows.append({
			"x": metric_value(p.record, frame.metric),
			"rating": p.record.rating,
			"director": p.record.director or PLACEHOLDER,
			"opacity": opacity,
			"tip_title": heading,
			**{f"tip_{label.lower()}": value for label, value in tip},
		})
	data = pd.DataFrame(rows)
	color_domain = [d if d is not None else PLACEHOLDER for d in frame.colors]
	brush_param = alt.selection_interval(name=BRUSH_NAME, encodings=["x", "y"])
	return (
		alt.Chart(data)
		.mark_circle(size=110, stroke="white", strokeWidth=1)
		.encode(
			x=alt.X("x:Q", title=frame.x_label, scale=alt.Scale(domain=list(frame.x_scale.domain), nice=False), axis=alt.Axis(tickCount=AXIS_TICKS)),
			y=alt.Y("rating:Q", title=frame.y_label, scale=alt.Scale(domain=list(frame.y_scale.domain), nice=False), axis=alt.Axis(tickCount=AXIS_TICKS)),
			color=alt.Color("director:N", scale=alt.Scale(domain=color_domain, range=list(frame.colors.values())), title="Director"),
			opacity=alt.Opacity("opacity:Q", scale=None, legend=None),
			tooltip=[
				alt.Tooltip("tip_title:N", title="Title"),
				alt.Tooltip("tip_year:N", title="Year"),
				alt.Tooltip("tip_director:N", title="Director"),
				alt.Tooltip("tip_rating:N", title="Rating"),
				alt.Tooltip("tip_runtime:N", title="Runtime"),
				alt.Tooltip("tip_gross:N", title="Gross"),
			],
		)
		.add_params(brush_param)
		.properties(width=frame.layout.inner_width, height=frame.layout.inner_height)
	)


def brush_from_event(event, frame: ChartFrame) -> Optional[BrushRect]:
	"""Project the data-space interval Vega-Lite reports into a pixel rectangle."""
	interval = (event or {}).get("selection", {}).get(BRUSH_NAME) or {}
	xs, ys = interval.get("x"), interval.get("rating")
	if not xs or not ys:
		return None
	return BrushRect.from_corners(
		frame.x_scale(xs[0]), frame.y_scale(ys[0]),
		frame.x_scale(xs[1]), frame.y_scale(ys[1]),
	)


state = session.state
message, is_error = session.status

# Chart: nothing to draw when the filtered view has no x or y values
if state.frame is None:
	st.warning("Nothing to draw: the filtered films have no values for this axis.")
else:
	event = st.altair_chart(
		build_chart(state.frame, state.brush),
		on_select="rerun",
		selection_mode=[BRUSH_NAME],
		key=f"scatter-{st.session_state['chart_generation']}",
	)
	rect = brush_from_event(event, state.frame)
	if rect != state.brush:
		session.dispatch(BrushChanged(rect))
		st.rerun()  # redraw with the new highlight and table

# Status line distinguishes "nothing matches" from load failure
if is_error:
	st.error(message)
else:
	st.caption(message)

# Results table follows the selection, or the whole view without one
st.dataframe(pd.DataFrame(table_rows(state.table_records)), hide_index=True, width="stretch")
