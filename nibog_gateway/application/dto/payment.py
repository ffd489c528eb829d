"""Data transfer objects for payment operations."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from nibog_gateway.domain.entities import PaymentStatus


@dataclass(frozen=True)
class PaymentInitiationRequest:
    """Input data for starting a checkout payment."""

    booking_id: str
    user_id: str
    amount: float
    mobile_number: str

    def validate(self) -> List[str]:
        errors = []

        if not self.booking_id or not str(self.booking_id).strip():
            errors.append("booking_id is required")

        if not self.user_id or not str(self.user_id).strip():
            errors.append("user_id is required")

        if not self.mobile_number or not str(self.mobile_number).strip():
            errors.append("mobile_number is required")

        return errors


@dataclass(frozen=True)
class PaymentInitiationResponse:
    """Result of a successful payment initiation."""

    merchant_transaction_id: str
    amount_paise: int
    redirect_url: Optional[str]
    gateway_code: Optional[str]


@dataclass(frozen=True)
class PaymentRecordResult:
    """
    Outcome of forwarding a successful payment to the backend.

    A failed forward is reported here, not raised, so the caller still
    learns the payment status.
    """

    booking_ref: str
    booking_id: Optional[Any]
    payment_recorded: bool
    duplicate: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class PaymentStatusResponse:
    """Resolved status of a merchant transaction."""

    merchant_transaction_id: str
    status: PaymentStatus
    gateway_code: Optional[str]
    gateway_state: Optional[str]
    gateway_transaction_id: Optional[str]
    amount_paise: Optional[int]
    record: Optional[PaymentRecordResult] = None

    @classmethod
    def from_gateway(
        cls,
        merchant_transaction_id: str,
        status: PaymentStatus,
        body: Dict[str, Any],
        state: Optional[str],
    ) -> "PaymentStatusResponse":
        data = body.get("data")
        if not isinstance(data, dict):
            data = {}
        amount = data.get("amount")
        return cls(
            merchant_transaction_id=data.get("merchantTransactionId") or merchant_transaction_id,
            status=status,
            gateway_code=body.get("code"),
            gateway_state=state,
            gateway_transaction_id=data.get("transactionId"),
            amount_paise=amount if isinstance(amount, int) else None,
        )
