"""Monthly wish models (vacation, free day, duty day)."""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class WishType(str, Enum):
    """Wish codes used in the monthly wish sheet."""
    VACATION = "U"  # Hard: becomes an absence
    FREE = "F"      # Soft: prefers no duty that day
    DUTY = "D"      # Soft: prefers a 24h duty that day

    @property
    def label(self) -> str:
        return {
            WishType.VACATION: "Vacation",
            WishType.FREE: "Free day",
            WishType.DUTY: "Duty wish (24h)",
        }[self]

    @property
    def is_hard(self) -> bool:
        return self is WishType.VACATION

    @classmethod
    def from_code(cls, code) -> Optional["WishType"]:
        """Parse a cell code; blank or unknown codes give None."""
        if code is None:
            return None
        key = str(code).strip().upper()
        for member in cls:
            if member.value == key:
                return member
        return None


@dataclass
class MonthlyWish:
    """One wish of one person for one date."""
    person_id: int
    person_name: str
    date: date
    wish_type: WishType
    fulfilled: Optional[bool] = None  # None = not evaluated yet
    remark: str = ""

    @property
    def is_hard(self) -> bool:
        return self.wish_type.is_hard

    @property
    def is_evaluated(self) -> bool:
        return self.fulfilled is not None

    @property
    def period(self) -> str:
        return f"{self.date.year:04d}-{self.date.month:02d}"
