"""
Customer resolution for checkout.

Finds the customer by auth identity, then by email. Existing customers
only get their empty fields filled; new customers are created from the
shipping address.
"""
import logging
from typing import Optional

from core.domain.entities import Customer, ShippingAddress
from core.domain.exceptions import OrderPersistenceError
from core.domain.repositories import CustomerRepository

from ..results import SideEffectResult, fire_and_log


logger = logging.getLogger(__name__)


class CustomerResolver:
    """Find-or-create customers with gap-filling merge."""

    def __init__(self, customers: CustomerRepository, default_country_code: str = "IN") -> None:
        self._customers = customers
        self._default_country_code = default_country_code

    async def resolve(
        self,
        email: str,
        shipping_address: ShippingAddress,
        auth_user_id: Optional[str] = None,
    ) -> str:
        """
        Resolve the customer id for an order.

        Args:
            email: Order contact email (lookup key)
            shipping_address: Address submitted with the order
            auth_user_id: Authenticated identity, if any

        Returns:
            Customer id

        Raises:
            OrderPersistenceError: If a new customer could not be created
        """
        existing = await self.find_existing(email, auth_user_id)

        if existing is not None:
            await self.merge_missing_fields(existing, shipping_address, auth_user_id)
            return existing.id

        customer = Customer.from_shipping_address(
            shipping_address,
            email=shipping_address.email or email,
            auth_user_id=auth_user_id,
            default_country_code=self._default_country_code,
        )
        try:
            created = await self._customers.add(customer)
        except Exception as e:
            logger.error(f"Error creating customer for {email}: {e}", exc_info=True)
            raise OrderPersistenceError("Failed to create customer record") from e

        logger.info(f"Created new customer: {created.id}")
        return created.id

    async def find_existing(self, email: str, auth_user_id: Optional[str] = None) -> Optional[Customer]:
        if auth_user_id:
            customer = await self._customers.find_by_auth_user_id(auth_user_id)
            if customer is not None:
                logger.info(f"Found existing customer by auth_user_id: {customer.id}")
                return customer

        customer = await self._customers.find_by_email(email)
        if customer is not None:
            logger.info(f"Found existing customer by email: {customer.id}")
        return customer

    async def merge_missing_fields(
        self,
        customer: Customer,
        shipping_address: ShippingAddress,
        auth_user_id: Optional[str] = None,
    ) -> SideEffectResult:
        """Write only the fields the stored customer is missing."""
        changes = customer.missing_fields_from(shipping_address, auth_user_id)
        if not changes:
            return SideEffectResult.success("customer merge")

        result = await fire_and_log(
            f"customer merge for {customer.id}",
            lambda: self._customers.update(customer.id, changes),
        )
        if result.ok:
            logger.info(f"Updated customer {customer.id} with missing fields: {sorted(changes)}")
        return result
