"""Customer constants."""

from django.db import models


class CustomerStatus(models.TextChoices):
    ACTIVE = "Active", "Active"
    INACTIVE = "Inactive", "Inactive"
    SUSPENDED = "Suspended", "Suspended"
    BANNED = "Banned", "Banned"


# Statuses that collapse onto ``Customer.deactivate()``.
DEACTIVATING_STATUSES = {
    CustomerStatus.INACTIVE,
    CustomerStatus.SUSPENDED,
    CustomerStatus.BANNED,
}

NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 20
