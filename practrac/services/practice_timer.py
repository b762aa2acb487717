"""Live practice timer.

A practice runs its phases back to back. Each phase counts down from its
planned duration while an overall clock counts up; when a phase runs out the
timer moves to the next one, and running out of the last phase completes the
practice. The coach can pause, resume and skip back and forth between phases.

The timer is a plain object so it can be driven from a request handler: load
it from the JSON state stored on a session, apply an action, store
``to_state()`` back.
"""

DEFAULT_PRACTICE_MINUTES = 60


class TimerStateError(ValueError):
    """Raised when an action does not apply to the timer's current state."""


class PracticeTimer:
    def __init__(self, phase_durations, estimated_duration=None):
        # Durations are minutes, as planned on the practice
        self.phase_durations = [int(d or 0) for d in phase_durations]
        self.estimated_duration = estimated_duration
        self.current_phase = 0
        self.phase_time_remaining = 0
        self.total_elapsed = 0
        self.is_paused = False
        self.is_complete = False
        self.is_started = False

    # ------- state -------
    @classmethod
    def from_state(cls, state, phase_durations, estimated_duration=None):
        timer = cls(phase_durations, estimated_duration)
        if not state:
            return timer
        timer.is_started = bool(state.get("isStarted", True))
        timer.current_phase = int(state.get("currentPhase") or 0)
        timer.phase_time_remaining = int(state.get("phaseTimeRemaining") or 0)
        timer.total_elapsed = int(state.get("totalTimeElapsed") or 0)
        timer.is_paused = bool(state.get("isPaused", False))
        timer.is_complete = bool(state.get("isComplete", False))
        if timer.phase_durations:
            timer.current_phase = max(0, min(timer.current_phase, len(timer.phase_durations) - 1))
        else:
            timer.current_phase = 0
        return timer

    def to_state(self):
        return {
            "isStarted": self.is_started,
            "currentPhase": self.current_phase,
            "phaseTimeRemaining": self.phase_time_remaining,
            "totalTimeElapsed": self.total_elapsed,
            "phaseTimeElapsed": self.phase_elapsed,
            "isPaused": self.is_paused,
            "isComplete": self.is_complete,
        }

    @property
    def has_phases(self):
        return bool(self.phase_durations)

    @property
    def is_last_phase(self):
        return not self.has_phases or self.current_phase >= len(self.phase_durations) - 1

    def _phase_seconds(self, index):
        if self.has_phases:
            return self.phase_durations[index] * 60
        return (self.estimated_duration or DEFAULT_PRACTICE_MINUTES) * 60

    @property
    def phase_elapsed(self):
        if not self.is_started:
            return 0
        return max(0, self._phase_seconds(self.current_phase) - self.phase_time_remaining)

    # ------- actions -------
    def start(self):
        if self.is_started:
            raise TimerStateError("Timer is already running")
        self.is_started = True
        self.is_paused = False
        self.current_phase = 0
        self.phase_time_remaining = self._phase_seconds(0)

    def tick(self, seconds=1):
        """Advance the clocks by ``seconds``; returns the seconds consumed."""
        if not self.is_started:
            raise TimerStateError("Timer has not been started")
        if self.is_complete or self.is_paused or seconds <= 0:
            return 0

        consumed = 0
        while seconds > 0 and not self.is_complete:
            if self.phase_time_remaining <= 0:
                self._advance_or_complete()
                continue
            step = min(seconds, self.phase_time_remaining)
            self.phase_time_remaining -= step
            self.total_elapsed += step
            consumed += step
            seconds -= step
            if self.phase_time_remaining == 0:
                self._advance_or_complete()
        return consumed

    def pause(self):
        self._require_running()
        self.is_paused = True

    def resume(self):
        self._require_running()
        self.is_paused = False

    def next_phase(self):
        self._require_running()
        if not self.is_last_phase:
            self._enter_phase(self.current_phase + 1)

    def previous_phase(self):
        self._require_running()
        if self.has_phases and self.current_phase > 0:
            self._enter_phase(self.current_phase - 1)

    def apply(self, action, seconds=1):
        """Dispatch a named action as posted by the live practice screen."""
        handlers = {
            "start": self.start,
            "tick": lambda: self.tick(seconds),
            "pause": self.pause,
            "resume": self.resume,
            "next": self.next_phase,
            "previous": self.previous_phase,
        }
        if action not in handlers:
            raise TimerStateError(f"Unknown timer action: {action}")
        handlers[action]()
        return self

    # ------- internals -------
    def _require_running(self):
        if not self.is_started:
            raise TimerStateError("Timer has not been started")
        if self.is_complete:
            raise TimerStateError("Practice is already complete")

    def _enter_phase(self, index):
        self.current_phase = index
        self.phase_time_remaining = self._phase_seconds(index)

    def _advance_or_complete(self):
        if self.is_last_phase:
            self.phase_time_remaining = 0
            self.is_complete = True
        else:
            self._enter_phase(self.current_phase + 1)


def format_time(seconds):
    """Phase countdown display, ``MM:SS``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def format_overall_time(seconds):
    """Overall clock display, ``H:MM:SS``."""
    hours, rest = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def elapsed_minutes(seconds):
    """Whole minutes, rounding halves up."""
    return (max(0, int(seconds)) + 30) // 60
