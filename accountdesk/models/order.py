"""Read-only order (invoice) projection used by the orders popover."""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List

from accountdesk.config import SETTLED_ORDER_STATUSES
from accountdesk.models.account import AccountId
from accountdesk.utils.parsing import parse_date, parse_amount


class OrderStatus(str, enum.Enum):
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    POSTED_TO_QB = "posted_to_qb"
    PAID = "paid"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"  # Any status the API adds later

    @classmethod
    def parse(cls, value: Optional[str]) -> "OrderStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class OrderLine:
    product_code: str = ""
    product_description: Optional[str] = None
    quantity: float = 0.0
    uom: Optional[str] = None
    total: float = 0.0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "OrderLine":
        return cls(
            product_code=data.get("productCode") or "N/A",
            product_description=data.get("productDescription") or None,
            quantity=parse_amount(data.get("quantity")) or 0.0,
            uom=data.get("uom") or None,
            total=parse_amount(data.get("total")) or 0.0,
        )


@dataclass
class Order:
    id: str = ""
    order_no: str = ""
    order_date: Optional[datetime] = None
    status: OrderStatus = OrderStatus.DRAFT
    seller_account_id: Optional[AccountId] = None
    seller_account_name: str = ""
    buyer_account_id: Optional[AccountId] = None
    buyer_account_name: str = ""
    document_number: Optional[str] = None  # External invoice number
    lines: List[OrderLine] = field(default_factory=list)
    total_amount: float = 0.0

    @property
    def is_outstanding(self) -> bool:
        return self.status.value not in SETTLED_ORDER_STATUSES

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Order":
        seller_id = data.get("sellerAccountId")
        buyer_id = data.get("buyerAccountId")
        return cls(
            id=data.get("id") or "",
            order_no=data.get("orderNo") or "",
            order_date=parse_date(data.get("orderDate")),
            status=OrderStatus.parse(data.get("status")),
            seller_account_id=AccountId(seller_id) if seller_id else None,
            seller_account_name=data.get("sellerAccountName") or "Unknown",
            buyer_account_id=AccountId(buyer_id) if buyer_id else None,
            buyer_account_name=data.get("buyerAccountName") or "Unknown",
            document_number=data.get("qboDocNumber") or None,
            lines=[OrderLine.from_api(line) for line in data.get("lines") or []],
            total_amount=parse_amount(data.get("totalAmount")) or 0.0,
        )
