"""Wall clock access, kept behind an object so waits can be faked in tests."""

import time


class SystemClock:
    """Real time source backed by the time module."""

    def now(self) -> float:
        """Current Unix time in seconds."""
        return time.time()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
