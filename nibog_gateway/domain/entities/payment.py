"""Payment entities for the PhonePe pay page flow."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class MerchantCredentials:
    """
    PhonePe merchant identity and salt material.

    The salt key is the shared secret for X-VERIFY signatures and the
    salt index tells the gateway which key was used.
    """

    merchant_id: str
    salt_key: str
    salt_index: str

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.merchant_id:
            missing.append("merchant_id")
        if not self.salt_key:
            missing.append("salt_key")
        if not self.salt_index:
            missing.append("salt_index")
        return missing

    def __repr__(self) -> str:
        return (
            f"MerchantCredentials(merchant_id={self.merchant_id!r}, "
            f"salt_key='***', salt_index={self.salt_index!r})"
        )


@dataclass(frozen=True)
class PaymentInstrument:
    type: str = "PAY_PAGE"

    def to_dict(self) -> dict:
        return {"type": self.type}


@dataclass(frozen=True)
class PaymentRequest:
    """
    A single PhonePe payment initiation attempt.

    Attributes:
        merchant_id: Merchant identifier issued by PhonePe
        merchant_transaction_id: Unique per attempt, max 38 characters
        merchant_user_id: Our user identifier
        amount: Amount in paise (rupees * 100, rounded)
        redirect_url: Where the pay page sends the user afterwards
        redirect_mode: Always REDIRECT for the pay page flow
        callback_url: Server-to-server callback endpoint
        mobile_number: Digits only
        payment_instrument: Instrument descriptor
    """

    merchant_id: str
    merchant_transaction_id: str
    merchant_user_id: str
    amount: int
    redirect_url: str
    redirect_mode: str
    callback_url: str
    mobile_number: str
    payment_instrument: PaymentInstrument = field(default_factory=PaymentInstrument)

    @property
    def amount_rupees(self) -> float:
        return self.amount / 100

    def to_dict(self) -> dict:
        """Wire representation; key order is part of the signed payload."""
        return {
            "merchantId": self.merchant_id,
            "merchantTransactionId": self.merchant_transaction_id,
            "merchantUserId": self.merchant_user_id,
            "amount": self.amount,
            "redirectUrl": self.redirect_url,
            "redirectMode": self.redirect_mode,
            "callbackUrl": self.callback_url,
            "mobileNumber": self.mobile_number,
            "paymentInstrument": self.payment_instrument.to_dict(),
        }


@dataclass(frozen=True)
class SignedEnvelope:
    """Base64 payload plus its X-VERIFY signature."""

    base64_payload: str
    signature: str

    def to_dict(self) -> dict:
        return {
            "request": self.base64_payload,
            "xVerify": self.signature,
        }
