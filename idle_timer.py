# Deferred callback that fires once the drawing has been quiet for a while.

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import config

logger = logging.getLogger(__name__)


class IdleTimer:
    """Cancel-and-reschedule timer over a schedule/cancel pair.

    With tkinter the pair is ``widget.after`` and ``widget.after_cancel``;
    the token is whatever ``schedule`` returns.
    """

    def __init__(
        self,
        schedule: Callable[[int, Callable[[], None]], Any],
        cancel: Callable[[Any], None],
        callback: Callable[[], None],
        delay_ms: int = config.IDLE_TIMEOUT_MS,
    ) -> None:
        """Description: Init
        Inputs: schedule: Callable[[int, Callable[[], None]], Any], cancel: Callable[[Any], None], callback: Callable[[], None], delay_ms: int
        """
        self._schedule = schedule
        self._cancel = cancel
        self._callback = callback
        self.delay_ms = delay_ms
        self._token: Optional[Any] = None

    @property
    def pending(self) -> bool:
        return self._token is not None

    def reset(self) -> None:
        """Description: Drop any pending callback and start the quiet window again
        Inputs: None
        """
        self.cancel()
        self._token = self._schedule(self.delay_ms, self._fire)

    def cancel(self) -> None:
        if self._token is None:
            return
        token = self._token
        self._token = None
        self._cancel(token)

    def _fire(self) -> None:
        self._token = None
        logger.debug("Idle for %d ms", self.delay_ms)
        self._callback()
