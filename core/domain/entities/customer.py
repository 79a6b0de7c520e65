"""
Customer entity.

Address fields fill in incrementally: once a field holds a value, later
orders never overwrite it.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import uuid


# Entity attribute -> shipping address attribute
MERGEABLE_FIELDS = {
    "phone": "phone",
    "first_name": "first_name",
    "last_name": "last_name",
    "address1": "address1",
    "address2": "address2",
    "city": "city",
    "province": "province",
    "zip": "zip",
    "country_code": "country_code",
}


@dataclass(frozen=True)
class ShippingAddress:
    """Address captured at checkout."""
    first_name: str
    last_name: str
    email: str
    address1: str
    city: str
    zip: str
    phone: Optional[str] = None
    address2: Optional[str] = None
    province: Optional[str] = None
    country_code: Optional[str] = None


@dataclass
class Customer:
    """Customer record, optionally linked to an auth identity."""
    email: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    auth_user_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    zip: Optional[str] = None
    country_code: Optional[str] = None
    type: str = "shipping"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_shipping_address(
        cls,
        address: ShippingAddress,
        email: str,
        auth_user_id: Optional[str] = None,
        default_country_code: str = "IN",
    ) -> "Customer":
        return cls(
            email=email,
            auth_user_id=auth_user_id,
            first_name=address.first_name,
            last_name=address.last_name or "",
            phone=address.phone or None,
            address1=address.address1,
            address2=address.address2 or None,
            city=address.city,
            province=address.province or None,
            zip=address.zip,
            country_code=address.country_code or default_country_code,
        )

    def missing_fields_from(
        self,
        address: ShippingAddress,
        auth_user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Compute the gap-filling update for this customer.

        Only attributes that are currently empty and have a non-empty
        incoming value are returned.
        """
        changes: Dict[str, Any] = {}
        for attr, source in MERGEABLE_FIELDS.items():
            incoming = getattr(address, source)
            if not getattr(self, attr) and incoming:
                changes[attr] = incoming
        if auth_user_id and not self.auth_user_id:
            changes["auth_user_id"] = auth_user_id
        return changes

    @property
    def has_address(self) -> bool:
        return bool(self.address1 and self.city)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
