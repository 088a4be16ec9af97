# blomsterlan/validation.py
"""
Explicit validation functions, one per entity and operation.

Each returns a ValidationResult holding either the validated model or the
list of field-level problems; nothing here raises for bad input. Field names
in the errors use the wire (camelCase) spelling so clients can map them back
onto their form inputs.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from blomsterlan.errors import FieldError, ValidationError
from blomsterlan.models.customers import CustomerCreate, CustomerUpdate
from blomsterlan.models.items import ItemCreate, ItemUpdate
from blomsterlan.models.transactions import TransactionCreate

M = TypeVar("M", bound=BaseModel)


@dataclass
class ValidationResult(Generic[M]):
    value: Optional[M] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> M:
        """Return the value, or raise ValidationError carrying the field errors."""
        if self.errors:
            raise ValidationError(self.errors)
        return self.value


def _field_name(loc: tuple) -> str:
    if not loc:
        return "body"
    return ".".join(str(part) for part in loc)


def _validate(model_cls: Type[M], payload: Any) -> ValidationResult[M]:
    if not isinstance(payload, dict):
        return ValidationResult(errors=[FieldError("body", "Förväntade ett JSON-objekt")])

    try:
        value = model_cls.model_validate(payload)
    except PydanticValidationError as exc:
        errors = [
            FieldError(_field_name(err["loc"]), err["msg"])
            for err in exc.errors()
        ]
        return ValidationResult(errors=errors)

    return ValidationResult(value=value)


def _reject_null_name(result: ValidationResult) -> ValidationResult:
    # A patch may omit name, but may not clear it.
    value = result.value
    if value is not None and "name" in value.model_fields_set and value.name is None:
        return ValidationResult(errors=[FieldError("name", "Namn får inte vara tomt")])
    return result


def validate_customer_create(payload: Any) -> ValidationResult[CustomerCreate]:
    return _validate(CustomerCreate, payload)


def validate_customer_update(payload: Any) -> ValidationResult[CustomerUpdate]:
    return _reject_null_name(_validate(CustomerUpdate, payload))


def validate_item_create(payload: Any) -> ValidationResult[ItemCreate]:
    return _validate(ItemCreate, payload)


def validate_item_update(payload: Any) -> ValidationResult[ItemUpdate]:
    return _reject_null_name(_validate(ItemUpdate, payload))


def validate_transaction_create(payload: Any) -> ValidationResult[TransactionCreate]:
    return _validate(TransactionCreate, payload)
