"""Input forms for adding addresses and contacts to an account."""

import re
from dataclasses import dataclass
from typing import Optional, Dict, Any, List

from accountdesk.config import DEFAULT_COUNTRY
from accountdesk.models.account import AddressType

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FormValidationError(ValueError):
    """Raised when a form is missing required fields; carries one message per problem."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


@dataclass
class AddressForm:
    type: AddressType = AddressType.BILLING
    line1: str = ""
    line2: Optional[str] = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = DEFAULT_COUNTRY
    is_primary: bool = False

    def validate(self) -> None:
        problems = []
        if not self.line1.strip():
            problems.append("line1 is required")
        if not self.city.strip():
            problems.append("city is required")
        if len(self.state.strip()) != 2:
            problems.append("state must be a 2-letter code")
        if not self.postal_code.strip():
            problems.append("postal code is required")
        if problems:
            raise FormValidationError(problems)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "type": self.type.value,
            "line1": self.line1.strip(),
            "city": self.city.strip(),
            "state": self.state.strip().upper(),
            "postalCode": self.postal_code.strip(),
            "country": self.country,
            "isPrimary": self.is_primary,
        }
        if self.line2 and self.line2.strip():
            payload["line2"] = self.line2.strip()
        return payload


@dataclass
class ContactForm:
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    is_primary: bool = False

    def validate(self) -> None:
        problems = []
        if not self.name.strip():
            problems.append("name is required")
        if not _EMAIL_PATTERN.match(self.email.strip()):
            problems.append("a valid email is required")
        if problems:
            raise FormValidationError(problems)

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "name": self.name.strip(),
            "email": self.email.strip(),
            "isPrimary": self.is_primary,
        }
        if self.phone and self.phone.strip():
            payload["phone"] = self.phone.strip()
        return payload
