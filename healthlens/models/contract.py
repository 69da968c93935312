# /healthlens/models/contract.py

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

# This file defines contracts: explicit, immutable descriptions of the fields a
# flow accepts or produces. Contracts are pure data; validation lives in
# healthlens/flows/validator.py.


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"


class FieldViolation(BaseModel):
    """A single field-level validation failure."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Dot path of the offending field, e.g. 'dailyPlans[0].dayNumber'")
    code: str = Field(description="Stable machine-readable error code")
    message: str


class FieldSpec(BaseModel):
    """
    Describes one field of a contract.

    `default` only counts when it was passed explicitly, so `None` can be a real
    default for nullable fields.
    """
    model_config = ConfigDict(frozen=True)

    type: FieldType
    description: str = ""
    required: bool = True
    nullable: bool = False
    default: Any = None

    # Refinements
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    ge: Optional[float] = None
    gt: Optional[float] = None
    le: Optional[float] = None
    lt: Optional[float] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    choices: Optional[List[str]] = None

    # Composite types
    item: Optional["FieldSpec"] = None
    fields: Optional["Contract"] = None

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set

    @model_validator(mode="after")
    def check_shape(self):
        if self.type == FieldType.ENUM and not self.choices:
            raise ValueError("enum fields need at least one choice")
        if self.type == FieldType.ARRAY and self.item is None:
            raise ValueError("array fields need an item spec")
        if self.type == FieldType.OBJECT and self.fields is None:
            raise ValueError("object fields need a nested contract")
        return self

    def type_label(self) -> str:
        if self.type == FieldType.ENUM:
            return "one of " + "|".join(self.choices)
        if self.type == FieldType.ARRAY:
            return f"array of {self.item.type_label()}"
        return self.type.value


class Contract(BaseModel):
    """An ordered set of named fields."""
    model_config = ConfigDict(frozen=True)

    name: str
    fields: Dict[str, FieldSpec] = Field(default_factory=dict)

    def outline(self, indent: int = 0) -> List[str]:
        """Human-readable field documentation, used as a response-format hint in prompts."""
        lines = []
        pad = "  " * indent
        for field_name, spec in self.fields.items():
            flags = "required" if spec.required else "optional"
            if spec.nullable:
                flags += ", may be null"
            line = f"{pad}- {field_name} ({spec.type_label()}, {flags})"
            if spec.description:
                line += f": {spec.description}"
            lines.append(line)
            nested = spec.fields if spec.type == FieldType.OBJECT else None
            if spec.type == FieldType.ARRAY and spec.item.type == FieldType.OBJECT:
                nested = spec.item.fields
            if nested is not None:
                lines.extend(nested.outline(indent + 1))
        return lines

    def describe(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


FieldSpec.model_rebuild()
Contract.model_rebuild()


# --- Builders --- #
# Short constructors that keep flow definitions readable.

def _spec(field_type: FieldType, description: str, required: bool, constraints: Dict[str, Any]) -> FieldSpec:
    return FieldSpec(type=field_type, description=description, required=required, **constraints)


def string(description: str = "", *, required: bool = True, **constraints) -> FieldSpec:
    return _spec(FieldType.STRING, description, required, constraints)


def number(description: str = "", *, required: bool = True, **constraints) -> FieldSpec:
    return _spec(FieldType.NUMBER, description, required, constraints)


def integer(description: str = "", *, required: bool = True, **constraints) -> FieldSpec:
    return _spec(FieldType.INTEGER, description, required, constraints)


def boolean(description: str = "", *, required: bool = True, **constraints) -> FieldSpec:
    return _spec(FieldType.BOOLEAN, description, required, constraints)


def enum(choices: List[str], description: str = "", *, required: bool = True, **constraints) -> FieldSpec:
    return _spec(FieldType.ENUM, description, required, dict(constraints, choices=list(choices)))


def array(item: FieldSpec, description: str = "", *, required: bool = True, **constraints) -> FieldSpec:
    return _spec(FieldType.ARRAY, description, required, dict(constraints, item=item))


def obj(name: str, fields: Dict[str, FieldSpec], description: str = "", *, required: bool = True, **constraints) -> FieldSpec:
    nested = Contract(name=name, fields=fields)
    return _spec(FieldType.OBJECT, description, required, dict(constraints, fields=nested))
