"""Reference decision policy.

The modulo and threshold rules are placeholders that keep the workflow
deterministic for tests. Production deployments inject their own
IRepairPolicy.
"""

from __future__ import annotations

from repairflow.core.config import PolicySettings
from repairflow.models.order import Customer

DEBT_ERROR = "Customer has outstanding debt"
BANNED_ERROR = "Customer is banned from the shop"
CLASSIFICATION_ERROR = "Order failed classification"


class ReferencePolicy:
    """IRepairPolicy driven purely by the order number and customer flags."""

    def __init__(self, settings: PolicySettings | None = None) -> None:
        self._settings = settings or PolicySettings()

    def classify(self, order_number: int) -> int:
        """Return the validation branch index, 0..3."""
        return order_number % self._settings.classify_modulus

    def validation_errors(self, customer: Customer) -> tuple[str, ...]:
        errors: list[str] = []
        if customer.has_outstanding_debt:
            errors.append(DEBT_ERROR)
        if customer.is_banned:
            errors.append(BANNED_ERROR)
        return tuple(errors) or (CLASSIFICATION_ERROR,)

    def can_recover(self, order_number: int) -> bool:
        return order_number < self._settings.recover_threshold

    def can_enqueue(self, order_number: int) -> bool:
        return order_number % self._settings.enqueue_modulus == 0

    def is_print_ready(self, order_number: int) -> bool:
        return order_number % self._settings.print_modulus == 0
