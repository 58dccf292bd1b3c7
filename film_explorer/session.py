"""
Dashboard session: owns the application state for one user session.

Handles the one-shot asynchronous dataset load, dispatches UI events into
state transitions, debounces resize redraws and manages the lifetime of the
per-render overlay (tooltip).
"""

import asyncio  # event loop, timers and worker thread for loading
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from .chart import ChartLayout
from .config import RESIZE_DEBOUNCE_SECONDS
from .dataset import build_dataset
from .models import BrushRect, FilmRecord, FilterParams
from .state import DashboardState, initial_state, resize, set_brush, set_filter, status_message

from loguru import logger  # console logger


class SessionError(RuntimeError):
	"""Raised when the session is used out of order (before load, or loaded twice)."""


class SessionPhase(str, Enum):
	IDLE = "idle"
	LOADING = "loading"
	READY = "ready"
	FAILED = "failed"  # terminal, no retry
	CLOSED = "closed"


@dataclass(frozen=True)
class FilterChanged:
	params: FilterParams


@dataclass(frozen=True)
class BrushChanged:
	rect: Optional[BrushRect]  # None clears the brush


@dataclass(frozen=True)
class Resized:
	layout: ChartLayout


Event = Union[FilterChanged, BrushChanged, Resized]


class ResizeDebouncer:
	"""
	Collapses bursts of calls into one callback after `delay` seconds of quiet.
	Each trigger cancels the pending timer and schedules a new one.
	"""

	def __init__(self, delay: float, callback: Callable[[], None], loop: Optional[asyncio.AbstractEventLoop] = None):
		self.delay = delay
		self.callback = callback
		self._loop = loop
		self._handle: Optional[asyncio.TimerHandle] = None

	@property
	def pending(self) -> bool:
		return self._handle is not None

	def trigger(self):
		loop = self._loop or asyncio.get_running_loop()
		if self._handle is not None:
			self._handle.cancel()
		self._handle = loop.call_later(self.delay, self._fire)

	def cancel(self):
		if self._handle is not None:
			self._handle.cancel()
			self._handle = None

	def _fire(self):
		self._handle = None
		self.callback()


class Overlay:
	"""Transient overlay (tooltip) owned by exactly one render pass."""

	_ids = itertools.count(1)

	def __init__(self):
		self.id = next(self._ids)
		self.destroyed = False
		self.content = None  # (heading, rows) while visible, else None

	def show(self, content):
		if self.destroyed:
			raise SessionError(f"Overlay {self.id} was already destroyed")
		self.content = content

	def hide(self):
		self.content = None

	def destroy(self):
		self.content = None
		self.destroyed = True


class OverlayOwner:
	"""Keeps at most one live overlay; creating a new one destroys the previous."""

	def __init__(self):
		self.current: Optional[Overlay] = None

	def create(self) -> Overlay:
		self.destroy()
		self.current = Overlay()
		return self.current

	def destroy(self):
		if self.current is not None:
			self.current.destroy()
			self.current = None


Renderer = Callable[[DashboardState, Overlay], None]


class DashboardSession:
	"""
	Sequences everything after the dataset load and routes events to
	state transitions. All recomputation happens synchronously in dispatch().
	"""

	def __init__(
		self,
		load_fn: Callable[[str], List[FilmRecord]],  # path -> normalized films
		render: Renderer,  # draws chart + table for a state
		layout: Optional[ChartLayout] = None,
		debounce_seconds: float = RESIZE_DEBOUNCE_SECONDS,
		loop: Optional[asyncio.AbstractEventLoop] = None,
	):
		self._load_fn = load_fn
		self._render_fn = render
		self._layout = layout or ChartLayout()
		self._pending_layout: Optional[ChartLayout] = None
		self.phase = SessionPhase.IDLE
		self.state: Optional[DashboardState] = None
		self.error: Optional[str] = None
		self.render_count = 0
		self.overlays = OverlayOwner()
		self._debouncer = ResizeDebouncer(debounce_seconds, self._redraw, loop)

	async def load(self, path) -> SessionPhase:
		"""
		Load and build the dataset once. Failure is terminal: the session
		stays FAILED with the error message and cannot be loaded again.
		"""
		if self.phase != SessionPhase.IDLE:
			raise SessionError(f"Load already attempted (phase={self.phase.value})")
		self.phase = SessionPhase.LOADING
		logger.info(f"[Session] Loading dataset from {path}")
		try:
			films = await asyncio.to_thread(self._load_fn, path)
			dataset = build_dataset(films)
		except Exception as e:
			self.phase = SessionPhase.FAILED
			self.error = f"Failed to load data: {e}"
			logger.error(f"[Session] {self.error}")
			return self.phase

		self.state = initial_state(dataset, self._layout)
		self.phase = SessionPhase.READY
		self._render(new_pass=True)
		return self.phase

	def dispatch(self, event: Event) -> DashboardState:
		"""Apply one UI event and re-render. Resize events are debounced."""
		if self.phase != SessionPhase.READY:
			raise SessionError(f"Session not ready (phase={self.phase.value})")

		if isinstance(event, FilterChanged):
			self.state = set_filter(self.state, event.params)
			self._render(new_pass=True)
		elif isinstance(event, BrushChanged):
			self.state = set_brush(self.state, event.rect)
			self._render(new_pass=False)
		elif isinstance(event, Resized):
			self._pending_layout = event.layout
			self._debouncer.trigger()
		else:
			raise SessionError(f"Unknown event: {event!r}")
		return self.state

	@property
	def status(self):
		"""(message, is_error) for the status line."""
		if self.phase == SessionPhase.FAILED:
			return self.error, True
		if self.state is None:
			return "Loading...", False
		return status_message(self.state)

	def close(self):
		"""Tear down: cancel pending redraws and destroy the live overlay."""
		self._debouncer.cancel()
		self.overlays.destroy()
		self.phase = SessionPhase.CLOSED
		logger.debug("[Session] Closed")

	def _redraw(self):
		if self.phase != SessionPhase.READY or self._pending_layout is None:
			return
		self.state = resize(self.state, self._pending_layout)
		self._pending_layout = None
		self._render(new_pass=True)

	def _render(self, new_pass: bool):
		# A new render pass replaces the overlay; brush updates reuse it
		overlay = self.overlays.current
		if new_pass or overlay is None:
			overlay = self.overlays.create()
		self.render_count += 1
		self._render_fn(self.state, overlay)
