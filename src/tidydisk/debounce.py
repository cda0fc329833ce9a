"""Input debouncing for auto-repeating interactive commands."""

import time

DEFAULT_COOLDOWN = 0.150  # seconds


class InputDebouncer:
    """Accept at most one event per cooldown window.

    Holding a key makes the terminal auto-repeat it; without gating, a held
    space bar flips a selection back and forth. Only noisy inputs (toggle,
    navigation) go through a debouncer; one-shot commands are already
    guarded by the session phase.
    """

    def __init__(self, cooldown: float = DEFAULT_COOLDOWN):
        if cooldown < 0:
            raise ValueError("cooldown must be non-negative")
        self.cooldown = cooldown
        self._last_accepted: float | None = None

    def should_process(self, now: float | None = None) -> bool:
        """Return True if an event at ``now`` should be acted on."""
        if now is None:
            now = time.monotonic()
        if self._last_accepted is not None and now - self._last_accepted < self.cooldown:
            return False
        self._last_accepted = now
        return True

    def reset(self) -> None:
        """Forget the last accepted event."""
        self._last_accepted = None
