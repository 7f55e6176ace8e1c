"""Domain records as stored by the front end (camelCase on the wire)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


CLOSED_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

ORDER_TYPES = ("in_house", "outsourced")
ACTIVITY_PRIORITIES = ("low", "medium", "high")
EXPENSE_CATEGORIES = ("material", "staff", "machinery", "rent", "maintenance", "other")
MESSAGE_TYPES = ("text", "image", "video", "audio")

# entity kind -> epoch-ms field the period filter reads
DATE_FIELDS: Dict[str, str] = {
    "orders": "createdAt",
    "expenses": "date",
    "activities": "date",
    "messages": "timestamp",
    "profits": "lastUpdated",
}


def _choice(data: Mapping[str, Any], key: str, choices: Sequence[str], default: str) -> str:
    value = str(data.get(key) or default)
    if value not in choices:
        raise ValueError(f"{key} must be one of {', '.join(choices)}")
    return value


@dataclass
class Order:
    id: str
    customer_name: str
    total_value: float
    created_at: int
    status: OrderStatus = OrderStatus.PENDING
    paid_value: float = 0.0
    order_type: str = "in_house"
    customer_phone: str = ""
    description: str = ""
    items_details: str = ""
    delivery_date: Optional[int] = None
    nota_fiscal_issued: bool = False
    notes: Optional[str] = None
    remaining_payment_date: Optional[int] = None
    created_by: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Order":
        return cls(
            id=str(data.get("id") or ""),
            customer_name=str(data.get("customerName", "")),
            total_value=float(data.get("totalValue") or 0),
            created_at=int(data["createdAt"]),
            status=OrderStatus(data.get("status") or OrderStatus.PENDING.value),
            paid_value=float(data.get("paidValue") or 0),
            order_type=_choice(data, "orderType", ORDER_TYPES, "in_house"),
            customer_phone=str(data.get("customerPhone") or ""),
            description=str(data.get("description") or ""),
            items_details=str(data.get("itemsDetails") or ""),
            delivery_date=data.get("deliveryDate"),
            nota_fiscal_issued=bool(data.get("notaFiscalIssued", False)),
            notes=data.get("notes"),
            remaining_payment_date=data.get("remainingPaymentDate"),
            created_by=data.get("createdBy"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "orderType": self.order_type,
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "description": self.description,
            "itemsDetails": self.items_details,
            "totalValue": self.total_value,
            "paidValue": self.paid_value,
            "createdAt": self.created_at,
            "deliveryDate": self.delivery_date,
            "status": self.status.value,
            "notaFiscalIssued": self.nota_fiscal_issued,
            "notes": self.notes,
            "remainingPaymentDate": self.remaining_payment_date,
            "createdBy": self.created_by,
        }


@dataclass
class Activity:
    id: str
    title: str
    date: int
    priority: str = "medium"
    completed: bool = False
    description: Optional[str] = None
    created_by: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Activity":
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title", "")),
            date=int(data["date"]),
            priority=_choice(data, "priority", ACTIVITY_PRIORITIES, "medium"),
            completed=bool(data.get("completed", False)),
            description=data.get("description"),
            created_by=data.get("createdBy"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "priority": self.priority,
            "completed": self.completed,
            "createdBy": self.created_by,
        }


@dataclass
class Expense:
    id: str
    description: str
    value: float
    category: str
    date: int
    created_by: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Expense":
        return cls(
            id=str(data.get("id") or ""),
            description=str(data.get("description", "")),
            value=float(data.get("value") or 0),
            category=_choice(data, "category", EXPENSE_CATEGORIES, "other"),
            date=int(data["date"]),
            created_by=str(data.get("createdBy") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "value": self.value,
            "category": self.category,
            "date": self.date,
            "createdBy": self.created_by,
        }


@dataclass
class ChatMessage:
    id: str
    sender: str
    content: str
    timestamp: int
    type: str = "text"
    edited: bool = False
    reply_to: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatMessage":
        return cls(
            id=str(data.get("id") or ""),
            sender=str(data.get("sender", "")),
            content=str(data.get("content", "")),
            timestamp=int(data["timestamp"]),
            type=_choice(data, "type", MESSAGE_TYPES, "text"),
            edited=bool(data.get("edited", False)),
            reply_to=data.get("replyTo"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sender": self.sender,
            "content": self.content,
            "type": self.type,
            "timestamp": self.timestamp,
            "edited": self.edited,
            "replyTo": self.reply_to,
        }


@dataclass
class ProfitCalculation:
    order_id: str
    revenue: float
    last_updated: int
    cost_fabric: float = 0.0
    cost_sewing: float = 0.0
    cost_print: float = 0.0
    cost_misc: float = 0.0

    @property
    def total_cost(self) -> float:
        return self.cost_fabric + self.cost_sewing + self.cost_print + self.cost_misc

    @property
    def profit(self) -> float:
        return self.revenue - self.total_cost

    @property
    def margin(self) -> float:
        """Profit as a percentage of revenue (0 when there is no revenue)."""
        return (self.profit / self.revenue) * 100 if self.revenue > 0 else 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProfitCalculation":
        return cls(
            order_id=str(data["orderId"]),
            revenue=float(data.get("revenue") or 0),
            last_updated=int(data["lastUpdated"]),
            cost_fabric=float(data.get("costFabric") or 0),
            cost_sewing=float(data.get("costSewing") or 0),
            cost_print=float(data.get("costPrint") or 0),
            cost_misc=float(data.get("costMisc") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orderId": self.order_id,
            "revenue": self.revenue,
            "costFabric": self.cost_fabric,
            "costSewing": self.cost_sewing,
            "costPrint": self.cost_print,
            "costMisc": self.cost_misc,
            "lastUpdated": self.last_updated,
        }

    def summary(self) -> Dict[str, Any]:
        return {**self.to_dict(), "totalCost": self.total_cost, "profit": self.profit, "margin": self.margin}


MODELS = {
    "orders": Order,
    "expenses": Expense,
    "activities": Activity,
    "messages": ChatMessage,
    "profits": ProfitCalculation,
}


def normalize_record(kind: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a posted record and return it in its stored camelCase form.

    Raises ``ValueError`` for unknown kinds, missing date/id fields and
    values outside the allowed choices.
    """
    model = MODELS.get(kind)
    if model is None:
        raise ValueError(f"unknown kind: {kind}")
    try:
        return model.from_dict(data).to_dict()
    except KeyError as exc:
        raise ValueError(f"{kind} record is missing {exc.args[0]}") from None
    except TypeError as exc:
        raise ValueError(f"invalid {kind} record: {exc}") from None
