"""Async study session: the controller plus visual transitions.

The controller changes state instantly.  :class:`StudySession` wraps each
section change in an exit fade and an entry fade on a
:class:`RenderSurface`, awaiting the configured durations in between::

    begin_transition(EXIT)  -> sleep(exit)  -> controller.advance()
    -> render(markup)       -> begin_transition(ENTRY) -> sleep(entry)

Only one transition may be in flight.  Any navigation or quiz action that
arrives before it ends raises :class:`TransitionInProgressError`; the
controller state is never touched mid-fade.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from sequential_study.domain.enums import NavigationSignal, TransitionPhase
from sequential_study.domain.exceptions import TransitionInProgressError
from sequential_study.domain.values import GradeResult, QuizStep
from sequential_study.infrastructure.config import TransitionConfig
from sequential_study.presentation.html import HtmlRenderer
from sequential_study.services.controller import StudyFlowController

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


@runtime_checkable
class RenderSurface(Protocol):
    """Where rendered markup and transition cues go."""

    def render(self, markup: str) -> None: ...

    def begin_transition(self, phase: TransitionPhase, duration_s: float) -> None: ...


class StudySession:
    """Drive a :class:`StudyFlowController` against a rendering surface.

    Parameters
    ----------
    controller:
        The flow controller; the session is its only mutator.
    surface:
        Receives markup and transition cues.
    renderer:
        Markup producer.  Defaults to :class:`HtmlRenderer`.
    config:
        Fade durations.  Defaults to 400 ms exit / 500 ms entry.
    sleep:
        Awaitable delay, replaceable in tests.
    """

    def __init__(
        self,
        controller: StudyFlowController,
        surface: RenderSurface,
        renderer: HtmlRenderer | None = None,
        config: TransitionConfig | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._controller = controller
        self._surface = surface
        self._renderer = renderer or HtmlRenderer()
        self._config = config or TransitionConfig()
        self._config.validate()
        self._sleep = sleep
        self._in_transition = False

    @property
    def controller(self) -> StudyFlowController:
        return self._controller

    @property
    def in_transition(self) -> bool:
        return self._in_transition

    def refresh(self) -> None:
        """Render the current state without any transition."""
        self._surface.render(self._renderer.render(self._controller))

    # -- navigation -----------------------------------------------------------

    async def next_section(self) -> NavigationSignal:
        """Advance with a fade; blocked and completing requests do not fade."""
        self._ensure_idle("next_section")
        c = self._controller
        if not c.current_section.nav_enabled or c.is_last_section:
            return c.advance()
        return await self._transition(c.advance)

    async def prev_section(self) -> NavigationSignal:
        """Retreat with a fade; a no-op on the first section."""
        self._ensure_idle("prev_section")
        if self._controller.is_first_section:
            return NavigationSignal.NO_OP
        return await self._transition(self._controller.retreat)

    # -- quiz -----------------------------------------------------------------

    def select_option(self, option: str) -> GradeResult:
        """Submit a multiple-choice option."""
        self._ensure_idle("select_option")
        result = self._controller.submit_quiz_answer(option)
        self.refresh()
        return result

    def submit_short_answer(self, text: str) -> GradeResult | None:
        """Submit a typed answer; blank input is ignored and returns ``None``."""
        self._ensure_idle("submit_short_answer")
        if not text.strip():
            logger.debug("Ignoring blank short answer")
            return None
        result = self._controller.submit_quiz_answer(text)
        self.refresh()
        return result

    def next_question(self) -> QuizStep:
        self._ensure_idle("next_question")
        step = self._controller.advance_quiz_question()
        self.refresh()
        return step

    async def handle(self, action: str, value: str = "") -> object:
        """Dispatch a ``data-action`` name from the rendered markup."""
        if action == "next":
            return await self.next_section()
        if action == "prev":
            return await self.prev_section()
        if action == "answer":
            return self.select_option(value)
        if action == "submit":
            return self.submit_short_answer(value)
        if action == "next-question":
            return self.next_question()
        raise ValueError(f"Unknown action: {action!r}")

    # -- internal helpers -----------------------------------------------------

    def _ensure_idle(self, action: str) -> None:
        if self._in_transition:
            logger.warning("%s rejected: transition in progress", action)
            raise TransitionInProgressError(
                f"Cannot {action} while a transition is in progress",
                action=action,
            )

    async def _transition(
        self, change: Callable[[], NavigationSignal]
    ) -> NavigationSignal:
        cfg = self._config
        self._in_transition = True
        try:
            logger.debug("Exit transition (%d ms)", cfg.exit_duration_ms)
            self._surface.begin_transition(TransitionPhase.EXIT, cfg.exit_seconds)
            await self._sleep(cfg.exit_seconds)
            signal = change()
            self.refresh()
            logger.debug("Entry transition (%d ms)", cfg.entry_duration_ms)
            self._surface.begin_transition(TransitionPhase.ENTRY, cfg.entry_seconds)
            await self._sleep(cfg.entry_seconds)
            return signal
        finally:
            self._in_transition = False
