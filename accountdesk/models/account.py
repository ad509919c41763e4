"""Account, address and contact models as returned by the dashboard API."""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List, NewType

from accountdesk.config import DEFAULT_COUNTRY
from accountdesk.utils.parsing import parse_date

AccountId = NewType("AccountId", str)


class AddressType(str, enum.Enum):
    BILLING = "billing"
    SHIPPING = "shipping"
    WAREHOUSE = "warehouse"
    PICKUP = "pickup"


@dataclass
class Address:
    id: str = ""
    account_id: Optional[AccountId] = None
    type: AddressType = AddressType.BILLING
    line1: str = ""
    line2: Optional[str] = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = DEFAULT_COUNTRY
    is_primary: bool = False

    @property
    def city_state(self) -> str:
        """Location label shown in the accounts grid, e.g. "Fresno, CA"."""
        return f"{self.city}, {self.state}"

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Address":
        try:
            address_type = AddressType(data.get("type") or AddressType.BILLING.value)
        except ValueError:
            address_type = AddressType.BILLING
        account_id = data.get("accountId")
        return cls(
            id=data.get("id") or "",
            account_id=AccountId(account_id) if account_id else None,
            type=address_type,
            line1=data.get("line1") or "",
            line2=data.get("line2") or None,
            city=data.get("city") or "",
            state=data.get("state") or "",
            postal_code=data.get("postalCode") or "",
            country=data.get("country") or DEFAULT_COUNTRY,
            is_primary=bool(data.get("isPrimary", False)),
        )


@dataclass
class Contact:
    id: str = ""
    account_id: Optional[AccountId] = None
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    is_primary: bool = False

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Contact":
        account_id = data.get("accountId")
        return cls(
            id=data.get("id") or "",
            account_id=AccountId(account_id) if account_id else None,
            name=data.get("name") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or None,
            is_primary=bool(data.get("isPrimary", False)),
        )


@dataclass
class Account:
    """
    Business entity (buyer or seller) with its contacts and addresses.

    Addresses and contacts keep the order the API returned them in; that
    order decides which record stands in as primary when none is flagged.
    """
    id: AccountId = AccountId("")
    code: str = ""
    name: str = ""
    active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    qbo_customer_id: Optional[str] = None  # Linked QuickBooks customer, if any
    addresses: List[Address] = field(default_factory=list)
    contacts: List[Contact] = field(default_factory=list)

    @property
    def primary_address(self) -> Optional[Address]:
        for address in self.addresses:
            if address.is_primary:
                return address
        return self.addresses[0] if self.addresses else None

    @property
    def primary_contact(self) -> Optional[Contact]:
        for contact in self.contacts:
            if contact.is_primary:
                return contact
        return self.contacts[0] if self.contacts else None

    @property
    def location(self) -> str:
        """Resolved "city, state" of the primary address, empty when there is none."""
        address = self.primary_address
        return address.city_state if address else ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Account":
        return cls(
            id=AccountId(str(data.get("id") or "")),
            code=data.get("code") or "",
            name=data.get("name") or "",
            active=bool(data.get("active", True)),
            created_at=parse_date(data.get("createdAt")),
            updated_at=parse_date(data.get("updatedAt")),
            qbo_customer_id=data.get("qboCustomerId") or None,
            addresses=[Address.from_api(a) for a in data.get("addresses") or []],
            contacts=[Contact.from_api(c) for c in data.get("contacts") or []],
        )
