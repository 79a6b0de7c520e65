"""Order number value object."""
import re
from dataclasses import dataclass

_ORDER_NUMBER_RE = re.compile(r"^[A-Z]{2,5}-\d{6}-\d{4,}$")


@dataclass(frozen=True)
class OrderNumber:
    """
    Human-readable order identifier.

    Format: <PREFIX>-<yymmdd>-<sequence> (sequence zero-padded to 4 digits)
    Examples:
    - TC-241229-0001
    - TC-250103-0117
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Order number cannot be empty")
        if not _ORDER_NUMBER_RE.match(self.value):
            raise ValueError(f"Invalid order number format: {self.value}")

    @classmethod
    def build(cls, prefix: str, date_key: str, sequence: int) -> "OrderNumber":
        return cls(value=f"{prefix}-{date_key}-{sequence:04d}")

    def __str__(self) -> str:
        return self.value
