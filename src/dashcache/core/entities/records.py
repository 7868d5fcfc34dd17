"""Typed records for the raw collections the dashboard reads.

The remote API returns camelCase JSON. These records parse it strictly:
an unknown subscription status is an error, while an unknown payment
period is kept as ``None`` and treated as monthly by the aggregator.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


class SubscriptionStatus(Enum):
    """Lifecycle status of a subscription."""

    ACTIVE = "active"
    PENDING = "pending"
    EXPIRED = "expired"
    CANCELED = "canceled"


class PaymentPeriod(Enum):
    """Billing period of a subscription."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Any) -> "PaymentPeriod | None":
        """Parse a period, returning None when missing or unrecognized."""
        if isinstance(value, PaymentPeriod):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


def to_decimal(value: Any, default: Decimal | None = None) -> Decimal:
    """Convert a JSON number or numeric string to Decimal.

    Floats go through ``str`` so the decimal keeps the digits the
    server sent rather than the binary expansion.

    Args:
        value: The raw value.
        default: Returned when value is None.

    Returns:
        The decimal value.

    Raises:
        ValueError: If the value is not numeric.
    """
    if value is None:
        if default is None:
            raise ValueError("numeric value is required")
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"not a numeric value: {value!r}")
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"not a numeric value: {value!r}") from e


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a timestamp: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_date(value: Any) -> date | None:
    """Parse an ISO date or timestamp into a calendar date.

    Timestamps keep the calendar date written in them; no timezone
    conversion is applied.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_datetime(value).date()


@dataclass(frozen=True)
class SubscriptionRecord:
    """A subscription as seen by the dashboard.

    ``payment_amount`` only counts towards spending while the
    subscription is active.
    """

    id: int
    status: SubscriptionStatus
    payment_amount: Decimal = Decimal(0)
    payment_period: PaymentPeriod | None = PaymentPeriod.MONTHLY
    paid_until: date | None = None

    def __post_init__(self) -> None:
        """Validate the payment amount."""
        if self.payment_amount < 0:
            raise ValueError("payment_amount must not be negative")

    @property
    def is_active(self) -> bool:
        """Check if the subscription is active."""
        return self.status is SubscriptionStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubscriptionRecord":
        """Build a record from an API payload.

        Args:
            data: A subscription object with camelCase keys.

        Returns:
            A new SubscriptionRecord.

        Raises:
            ValueError: If the status or amount is invalid.
        """
        return cls(
            id=int(data["id"]),
            status=SubscriptionStatus(str(data.get("status", "active")).lower()),
            payment_amount=to_decimal(data.get("paymentAmount"), Decimal(0)),
            payment_period=PaymentPeriod.parse(data.get("paymentPeriod")),
            paid_until=parse_date(data.get("paidUntil")),
        )


@dataclass(frozen=True)
class CashbackTransaction:
    """One credit or debit on a user's cashback balance."""

    id: int
    user_id: int
    amount: Decimal
    description: str
    created_at: datetime

    @property
    def is_credit(self) -> bool:
        """Positive amounts are credits, everything else is a debit."""
        return self.amount > 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CashbackTransaction":
        """Build a transaction from an API payload."""
        return cls(
            id=int(data["id"]),
            user_id=int(data["userId"]),
            amount=to_decimal(data.get("amount")),
            description=str(data.get("description") or ""),
            created_at=parse_datetime(data["createdAt"]),
        )
