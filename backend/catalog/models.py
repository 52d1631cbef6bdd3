"""
Catalog Models — entity shapes returned by the catalog API and the drafts
submitted to it.

Relationship graph:
    Product ──┐
              ├── ProductEvent (ordered per product) ──┐
    Event ────┘                                        ├── Subscription
    Partner ───────────────────────────────────────────┘
"""

from enum import Enum

from pydantic import BaseModel, Field

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


# ─── Enums ──────────────────────────────────────────────────────────────────


class PartnerStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"

    def toggled(self) -> "PartnerStatus":
        return PartnerStatus.INACTIVE if self is PartnerStatus.ACTIVE else PartnerStatus.ACTIVE


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"

    def toggled(self) -> "SubscriptionStatus":
        if self is SubscriptionStatus.ACTIVE:
            return SubscriptionStatus.INACTIVE
        return SubscriptionStatus.ACTIVE


# ─── Nested read-only references ────────────────────────────────────────────


class ProductRef(BaseModel):
    id: int
    name: str
    description: str | None = None


class EventRef(BaseModel):
    id: int
    name: str
    description: str | None = None


class PartnerRef(BaseModel):
    id: int
    name: str
    merchant_number: str | None = None


class ProductEventRef(BaseModel):
    id: int
    product_id: int | None = None
    event_id: int | None = None
    product: ProductRef | None = None
    event: EventRef | None = None


# ─── Entities ───────────────────────────────────────────────────────────────


class Product(BaseModel):
    id: int
    name: str
    description: str


class Event(BaseModel):
    id: int
    name: str
    description: str


class Partner(BaseModel):
    id: int
    merchant_number: str
    name: str
    partner_id: str
    client_id: str
    status: PartnerStatus


class ProductEvent(BaseModel):
    id: int
    product_id: int
    event_id: int
    order: int
    product: ProductRef | None = None
    event: EventRef | None = None


class Subscription(BaseModel):
    id: int
    partner_id: int
    product_event_id: int
    status: SubscriptionStatus
    partner: PartnerRef | None = None
    product_event: ProductEventRef | None = None


# ─── Drafts ─────────────────────────────────────────────────────────────────


class ProductDraft(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)


class EventDraft(BaseModel):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)


class PartnerDraft(BaseModel):
    merchant_number: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    partner_id: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    status: PartnerStatus = PartnerStatus.ACTIVE


class ProductEventDraft(BaseModel):
    product_id: int = Field(..., ge=1)
    event_id: int = Field(..., ge=1)
    order: int = Field(1, ge=1)


class SubscriptionDraft(BaseModel):
    partner_id: int = Field(..., ge=1)
    product_event_id: int = Field(..., ge=1)
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
