# blomsterlan/models/base.py

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

# Text fields that must stay non-empty; everything else treats "" as "not given".
REQUIRED_TEXT_FIELDS = {"name"}


class ApiModel(BaseModel):
    """
    Snake_case in Python, camelCase on the wire. Input accepts either spelling.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class InputModel(ApiModel):
    """
    Base for request bodies. Unknown keys (id, createdAt, ...) are ignored.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any, info: ValidationInfo) -> Any:
        # Forms post "" for untouched optional inputs.
        if info.field_name in REQUIRED_TEXT_FIELDS:
            return value.strip() if isinstance(value, str) else value
        if isinstance(value, str) and value.strip() == "":
            return None
        return value


# SQLite INTEGER is a signed 64-bit value.
MIN_DB_INT = -(2**63)
MAX_DB_INT = 2**63 - 1


def fits_db_int(value: int) -> bool:
    return MIN_DB_INT <= value <= MAX_DB_INT
