"""
Entity forms — a draft of one record plus per-field validation errors.

A form opens in create mode (seeded from defaults) or edit mode (seeded from
an existing record). Validation runs on every field change and once more on
submit; an invalid draft never reaches the network.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from catalog.models import (
    EventDraft,
    PartnerDraft,
    PartnerStatus,
    ProductDraft,
    ProductEventDraft,
    SubscriptionDraft,
    SubscriptionStatus,
)
from console.controller import ListController, MutationResult, MutationStatus
from services.base import EntityKind

DraftT = TypeVar("DraftT", bound=BaseModel)

FieldErrors = dict[str, str]


@dataclass(frozen=True)
class CreateMode:
    pass


@dataclass(frozen=True)
class EditMode:
    entity: BaseModel


FormMode = Union[CreateMode, EditMode]


@dataclass(frozen=True)
class FormSchema:
    """Draft model, create-mode defaults and field labels for one entity."""

    draft_model: type[BaseModel]
    defaults: dict[str, Any]
    labels: dict[str, str]
    # Fields whose absence reads as "not selected" rather than "empty".
    references: tuple[str, ...] = ()


FORM_SCHEMAS: dict[EntityKind, FormSchema] = {
    EntityKind.PRODUCT: FormSchema(
        draft_model=ProductDraft,
        defaults={"name": "", "description": ""},
        labels={"name": "Name", "description": "Description"},
    ),
    EntityKind.EVENT: FormSchema(
        draft_model=EventDraft,
        defaults={"name": "", "description": ""},
        labels={"name": "Name", "description": "Description"},
    ),
    EntityKind.PARTNER: FormSchema(
        draft_model=PartnerDraft,
        defaults={
            "merchant_number": "",
            "name": "",
            "partner_id": "",
            "client_id": "",
            "status": PartnerStatus.ACTIVE.value,
        },
        labels={
            "merchant_number": "Merchant number",
            "name": "Name",
            "partner_id": "Partner ID",
            "client_id": "Client ID",
            "status": "Status",
        },
    ),
    EntityKind.PRODUCT_EVENT: FormSchema(
        draft_model=ProductEventDraft,
        defaults={"product_id": None, "event_id": None, "order": 1},
        labels={"product_id": "Product", "event_id": "Event", "order": "Order"},
        references=("product_id", "event_id"),
    ),
    EntityKind.SUBSCRIPTION: FormSchema(
        draft_model=SubscriptionDraft,
        defaults={
            "partner_id": None,
            "product_event_id": None,
            "status": SubscriptionStatus.ACTIVE.value,
        },
        labels={"partner_id": "Partner", "product_event_id": "Product event", "status": "Status"},
        references=("partner_id", "product_event_id"),
    ),
}


def _message_for(error: dict[str, Any], label: str, schema: FormSchema, field: str) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    if kind == "missing" or (field in schema.references and error.get("input") in (None, "")):
        return f"{label} is required"
    if kind == "string_too_short" and ctx.get("min_length") == 1:
        return f"{label} is required"
    if kind == "string_too_long":
        return f"{label} must be less than {ctx.get('max_length')} characters"
    if kind == "greater_than_equal":
        if field in schema.references:
            return f"{label} is required"
        return f"{label} must be at least {ctx.get('ge')}"
    if kind == "enum":
        return f"{label} must be one of: {ctx.get('expected')}"
    return error.get("msg", f"{label} is invalid")


class EntityForm(Generic[DraftT]):
    """Modal form state for one entity."""

    def __init__(self, kind: EntityKind):
        self.kind = kind
        self.schema = FORM_SCHEMAS[kind]
        self.mode: FormMode = CreateMode()
        self.values: dict[str, Any] = dict(self.schema.defaults)
        self.errors: FieldErrors = {}
        self.is_open = False

    @property
    def existing(self) -> BaseModel | None:
        return self.mode.entity if isinstance(self.mode, EditMode) else None

    def open(self, existing: BaseModel | None = None) -> None:
        if existing is not None:
            self.mode = EditMode(existing)
            data = existing.model_dump(mode="json")
            self.values = {name: data.get(name) for name in self.schema.defaults}
        else:
            self.mode = CreateMode()
            self.values = dict(self.schema.defaults)
        self.errors = {}
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def set_field(self, name: str, value: Any) -> FieldErrors:
        if name not in self.schema.defaults:
            raise KeyError(f"{self.kind.value} form has no field {name!r}")
        self.values[name] = value
        _, self.errors = self.validate()
        return self.errors

    def update(self, values: dict[str, Any]) -> FieldErrors:
        for name, value in values.items():
            if name in self.schema.defaults:
                self.values[name] = value
        _, self.errors = self.validate()
        return self.errors

    def validate(self) -> tuple[DraftT | None, FieldErrors]:
        try:
            draft = self.schema.draft_model.model_validate(self.values)
        except PydanticValidationError as exc:
            errors: FieldErrors = {}
            for error in exc.errors(include_url=False):
                field = str(error["loc"][0]) if error.get("loc") else "__all__"
                label = self.schema.labels.get(field, field)
                errors.setdefault(field, _message_for(error, label, self.schema, field))
            return None, errors
        return draft, {}  # type: ignore[return-value]

    async def submit(self, controller: ListController) -> MutationResult | None:
        """
        Validate and hand the draft to the list controller. Returns None when
        validation blocked the submission; the form stays open unless the
        mutation was applied.
        """
        draft, self.errors = self.validate()
        if draft is None:
            return None
        result = await controller.create_or_update(draft, self.existing)
        if result.status is MutationStatus.APPLIED:
            self.close()
        return result
