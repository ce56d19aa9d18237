"""Data types shared across the usage monitor."""

from dataclasses import dataclass, field
from datetime import datetime

from .config import OBSERVED_AT_FORMAT


def _now_minute() -> datetime:
    return datetime.now().replace(second=0, microsecond=0)


@dataclass(frozen=True)
class UsageSnapshot:
    """
    Data usage figures captured from one usage-summary page.

    Only the four raw figures are stored; ``total_gb``, ``remaining_gb`` and
    ``used_percentage`` are derived on every access.
    """

    carry_over_gb: float        # 繰越 – rolled over from the previous cycle
    base_allowance_gb: float    # 基本 – plan allowance
    purchased_extra_gb: float   # 有料 – paid add-on
    used_gb: float
    observed_at: datetime = field(default_factory=_now_minute)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "observed_at", self.observed_at.replace(second=0, microsecond=0)
        )

    @property
    def total_gb(self) -> float:
        return self.base_allowance_gb + self.carry_over_gb

    @property
    def remaining_gb(self) -> float:
        return round(self.total_gb - self.used_gb, 2)

    @property
    def used_percentage(self) -> float:
        total = self.total_gb
        if total > 0:
            return self.used_gb / total * 100
        return 0.0

    def as_dict(self) -> dict:
        return {
            "carry_over_gb": self.carry_over_gb,
            "base_allowance_gb": self.base_allowance_gb,
            "purchased_extra_gb": self.purchased_extra_gb,
            "used_gb": self.used_gb,
            "total_gb": self.total_gb,
            "remaining_gb": self.remaining_gb,
            "used_percentage": self.used_percentage,
            "observed_at": self.observed_at.strftime(OBSERVED_AT_FORMAT),
        }


@dataclass(frozen=True)
class Credentials:
    """Phone number / password pair used for one login cycle."""

    identifier: str
    secret: str = field(repr=False)

    def __bool__(self) -> bool:
        return bool(self.identifier and self.secret)
