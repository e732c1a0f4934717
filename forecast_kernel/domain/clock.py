"""
Clock -- Deterministic time abstraction.

Responsibility:
    Provides an injectable clock interface so that domain and engine code
    never call ``datetime.now()`` or ``date.today()`` directly.  The only
    engine code that needs the current time is reforecast creation, which
    stamps ``created_at`` and ``reforecast_date``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock,
    which is the one sanctioned I/O boundary for time).
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


class Clock(ABC):
    """
    Abstract clock interface.

    Contract:
        Callers that need the current time receive a Clock instance
        explicitly.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
        - ``now_utc()`` returns a UTC-normalized ``datetime``.
        - ``today()`` is the UTC calendar date of ``now_utc()``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    @abstractmethod
    def now_utc(self) -> datetime:
        """Get the current UTC time."""
        ...

    def today(self) -> date:
        """Get the current UTC calendar date."""
        return self.now_utc().date()


class SystemClock(Clock):
    """
    Production clock that returns actual system time.

    Non-goals:
        Not suitable for deterministic tests.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Guarantees:
        - ``now()`` returns the same value on repeated calls until ``advance()``
          or ``set_time()`` is called.
        - ``tick()`` advances by exactly 1 second and returns the new time.
    """

    def __init__(self, fixed_time: datetime | None = None):
        """
        Initialize with optional fixed time.

        Args:
            fixed_time: If provided, clock always returns this time.
                       If None, uses a default epoch time.
        """
        self._fixed_time = fixed_time or datetime(
            2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc
        )
        self._advance_seconds = 0

    def now(self) -> datetime:
        """Get the fixed/controlled time."""
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def now_utc(self) -> datetime:
        """Get the fixed/controlled UTC time."""
        return self.now().astimezone(timezone.utc)

    def set_time(self, time: datetime) -> None:
        """Set the clock to a specific time."""
        self._fixed_time = time
        self._advance_seconds = 0

    def advance(self, seconds: int = 1) -> None:
        """Advance the clock by the specified seconds."""
        self._advance_seconds += seconds

    def tick(self) -> datetime:
        """Advance by 1 second and return new time."""
        self.advance(1)
        return self.now()
