"""Pacing hooks invoked after every mower move."""

import threading
from typing import List

from .errors import RunCancelled


class NullPacer:
    """Headless pacer: never waits."""

    def pause(self, seconds: float, cancel_event: threading.Event) -> None:
        if cancel_event.is_set():
            raise RunCancelled("Run cancelled")


class SleepPacer:
    """
    Real-time pacer for interactive use.

    Waits on the mower's cancel event instead of sleeping, so a cancel()
    from another thread ends the wait immediately.
    """

    def pause(self, seconds: float, cancel_event: threading.Event) -> None:
        if seconds <= 0:
            if cancel_event.is_set():
                raise RunCancelled("Run cancelled")
            return
        if cancel_event.wait(seconds):
            raise RunCancelled("Run cancelled during pacing delay")


class RecordingPacer:
    """Virtual clock: records requested delays without waiting."""

    def __init__(self):
        self.delays: List[float] = []

    @property
    def elapsed(self) -> float:
        return sum(self.delays)

    def pause(self, seconds: float, cancel_event: threading.Event) -> None:
        if cancel_event.is_set():
            raise RunCancelled("Run cancelled")
        self.delays.append(seconds)
