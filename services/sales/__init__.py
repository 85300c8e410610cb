"""Подмодуль кассовых операций."""

from .dto import CartLine, CheckoutCommand, CheckoutResult, PaymentCommand, PaymentResult
from .sale_app_service import SaleAppService, sale_app_service

__all__ = [
    "SaleAppService",
    "sale_app_service",
    "CartLine",
    "CheckoutCommand",
    "CheckoutResult",
    "PaymentCommand",
    "PaymentResult",
]
