from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo, timezone

_MS_PER_DAY = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class DateRange:
    """Half-open stay interval: the guest sleeps from check_in up to check_out."""

    check_in: date
    check_out: date

    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def overlaps(self, other: DateRange) -> bool:
        # Touching endpoints (check-out day == next check-in day) do not overlap
        return self.check_in < other.check_out and other.check_in < self.check_out

    def is_valid(self) -> bool:
        return self.check_in < self.check_out

    def to_dict(self) -> dict:
        return {
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "nights": self.nights(),
        }

    @classmethod
    def from_iso(cls, check_in: str, check_out: str) -> DateRange:
        """Build a range from two ``YYYY-MM-DD`` strings."""
        return cls(date.fromisoformat(check_in), date.fromisoformat(check_out))


def to_epoch_ms(day: date, tz: tzinfo = timezone.utc) -> int:
    """Epoch milliseconds of local midnight of ``day`` in ``tz``."""
    midnight = datetime.combine(day, time.min, tzinfo=tz)
    return int(midnight.timestamp()) * 1000


def from_epoch_ms(ms: int, tz: tzinfo = timezone.utc) -> date:
    """Calendar day in ``tz`` that contains the instant ``ms``."""
    seconds, _ = divmod(ms, 1000)
    return datetime.fromtimestamp(seconds, tz=tz).date()
