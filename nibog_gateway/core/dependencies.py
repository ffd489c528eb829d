"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from nibog_gateway.core.config import settings
from nibog_gateway.domain.entities import MerchantCredentials
from nibog_gateway.infrastructure.clients import (
    HttpBookingBackendClient,
    HttpPhonePeClient,
)
from nibog_gateway.infrastructure.stores import InMemoryKeyValueStore
from nibog_gateway.application.services import (
    EventCatalogService,
    PaymentRecordService,
    PaymentService,
    PromoCodeService,
    SlotStatusService,
)
from nibog_gateway.service.payments import PaymentRequestBuilder, TransactionIdGenerator


# Process-wide stores
@lru_cache
def get_slot_status_store() -> InMemoryKeyValueStore:
    """Get the slot status store shared by all requests."""
    return InMemoryKeyValueStore(default_ttl_seconds=settings.slot_status_ttl_seconds)


@lru_cache
def get_event_cache() -> InMemoryKeyValueStore:
    """Get the event catalog cache shared by all requests."""
    return InMemoryKeyValueStore(default_ttl_seconds=settings.event_cache_ttl_seconds)


@lru_cache
def get_payment_record_store() -> InMemoryKeyValueStore:
    """Get the store of already recorded payments."""
    return InMemoryKeyValueStore(default_ttl_seconds=settings.payment_record_ttl_seconds)


@lru_cache
def get_transaction_id_generator() -> TransactionIdGenerator:
    """Get the transaction ID generator shared by all requests."""
    return TransactionIdGenerator()


# Payment building
def get_merchant_credentials() -> MerchantCredentials:
    """Get the configured PhonePe merchant credentials."""
    return MerchantCredentials(
        merchant_id=settings.phonepe_merchant_id,
        salt_key=settings.phonepe_salt_key,
        salt_index=settings.phonepe_salt_index,
    )


def get_payment_request_builder(
    credentials: Annotated[MerchantCredentials, Depends(get_merchant_credentials)],
    id_generator: Annotated[TransactionIdGenerator, Depends(get_transaction_id_generator)],
) -> PaymentRequestBuilder:
    """Get a PaymentRequestBuilder; fails fast on missing credentials."""
    return PaymentRequestBuilder(
        credentials=credentials,
        app_url=settings.app_url,
        callback_path=settings.phonepe_callback_path,
        id_generator=id_generator,
    )


# External client dependencies
def get_payment_gateway_client() -> HttpPhonePeClient:
    """Get a PaymentGatewayClient instance."""
    return HttpPhonePeClient()


def get_backend_client() -> HttpBookingBackendClient:
    """Get a BookingBackendClient instance."""
    return HttpBookingBackendClient()


# Service dependencies
def get_payment_record_service(
    backend_client: Annotated[HttpBookingBackendClient, Depends(get_backend_client)],
    store: Annotated[InMemoryKeyValueStore, Depends(get_payment_record_store)],
    credentials: Annotated[MerchantCredentials, Depends(get_merchant_credentials)],
) -> PaymentRecordService:
    """Get a PaymentRecordService instance."""
    return PaymentRecordService(
        backend_client=backend_client,
        store=store,
        merchant_id=credentials.merchant_id,
        ttl_seconds=settings.payment_record_ttl_seconds,
    )


def get_payment_service(
    builder: Annotated[PaymentRequestBuilder, Depends(get_payment_request_builder)],
    gateway_client: Annotated[HttpPhonePeClient, Depends(get_payment_gateway_client)],
    recorder: Annotated[PaymentRecordService, Depends(get_payment_record_service)],
) -> PaymentService:
    """Get a PaymentService instance with all dependencies."""
    return PaymentService(builder=builder, gateway_client=gateway_client, recorder=recorder)


def get_slot_status_service(
    store: Annotated[InMemoryKeyValueStore, Depends(get_slot_status_store)],
) -> SlotStatusService:
    """Get a SlotStatusService instance."""
    return SlotStatusService(store=store, ttl_seconds=settings.slot_status_ttl_seconds)


def get_event_catalog_service(
    backend_client: Annotated[HttpBookingBackendClient, Depends(get_backend_client)],
    cache: Annotated[InMemoryKeyValueStore, Depends(get_event_cache)],
    slot_service: Annotated[SlotStatusService, Depends(get_slot_status_service)],
) -> EventCatalogService:
    """Get an EventCatalogService instance."""
    return EventCatalogService(
        backend_client=backend_client,
        cache=cache,
        slot_service=slot_service,
        cache_ttl_seconds=settings.event_cache_ttl_seconds,
    )


def get_promo_code_service(
    backend_client: Annotated[HttpBookingBackendClient, Depends(get_backend_client)],
) -> PromoCodeService:
    """Get a PromoCodeService instance."""
    return PromoCodeService(backend_client=backend_client)
