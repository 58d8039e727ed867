"""Order domain constants.

Status and payment method choices, the order state machine and the
pricing rules used to derive order totals.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    CONFIRMED = "Confirmed", "Confirmed"
    SHIPPED = "Shipped", "Shipped"
    DELIVERED = "Delivered", "Delivered"
    CANCELLED = "Cancelled", "Cancelled"


class PaymentMethod(models.TextChoices):
    CREDIT_CARD = "CreditCard", "Credit card"
    DEBIT_CARD = "DebitCard", "Debit card"
    PAYPAL = "PayPal", "PayPal"
    BANK_TRANSFER = "BankTransfer", "Bank transfer"
    CASH_ON_DELIVERY = "CashOnDelivery", "Cash on delivery"
    GIFT_CARD = "GiftCard", "Gift card"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: {OrderStatus.CANCELLED},
}

TERMINAL_STATES: set[str] = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

# Orders in these states may be deleted.
DELETABLE_STATES: set[str] = {OrderStatus.PENDING, OrderStatus.CANCELLED}

# Cancelling from these states puts the reserved copies back on the shelf.
RESTOCK_ON_CANCEL_STATES: set[str] = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("50")
SHIPPING_COST = Decimal("5.99")

NOTES_MAX_LENGTH = 500
