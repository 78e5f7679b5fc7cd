"""
Transaction Ledger Backend — Validation Engine
===============================================

What:  Checks a request body against the create or update schema of an
       entity and either returns the cleaned values or raises a
       ValidationError listing every violation.
Why:   Validation is the first stage of every write. It must finish before
       the store or the referential check are touched, and it must report
       all problems in one response instead of one per round trip.
How:   Schemas are strict Pydantic models built from the shared rules in
       schemas/fields.py. Pydantic already collects every error; this module
       translates them into the rule vocabulary clients see:

           required     field missing (create) or nulled (update)
           string       not a string
           stringEmpty  empty string where one character is required
           stringMin    shorter than the minimum length
           number       not a number
           numberMin    below the minimum
           datePattern  date not written as MM/DD/YYYY
           object       body is not a JSON object
           json         body is not valid JSON

The validator holds no state beyond its two schema classes, so one instance
per entity is shared by every request.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from txledger.exceptions import ValidationError

CREATE = "create"
UPDATE = "update"

_STRING_ERRORS = {"string_type", "string_sub_type"}
_NUMBER_ERRORS = {"float_type", "float_parsing", "int_type", "finite_number"}


def _echo(value: Any) -> Any:
    # inf and nan have no JSON form; echo them back as text
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def _field_name(loc: Sequence[Any]) -> str:
    # Request bodies are flat; drop FastAPI's leading "body" segment if present
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts) if parts else "body"


def to_violation(error: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate one Pydantic error dict into a violation entry."""
    field = _field_name(error.get("loc", ()))
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    actual = error.get("input")

    if kind == "missing":
        return {
            "type": "required",
            "field": field,
            "message": f"The '{field}' field is required.",
        }
    if kind in _STRING_ERRORS:
        if actual is None:
            return {
                "type": "required",
                "field": field,
                "message": f"The '{field}' field cannot be null.",
            }
        return {
            "type": "string",
            "field": field,
            "message": f"The '{field}' field must be a string.",
            "actual": actual,
        }
    if kind == "string_too_short":
        minimum = ctx.get("min_length")
        if minimum == 1:
            return {
                "type": "stringEmpty",
                "field": field,
                "message": f"The '{field}' field must not be empty.",
                "actual": actual,
            }
        return {
            "type": "stringMin",
            "field": field,
            "message": (
                f"The '{field}' field length must be greater than or equal to "
                f"{minimum} characters long."
            ),
            "expected": minimum,
            "actual": len(actual) if isinstance(actual, str) else actual,
        }
    if kind in _NUMBER_ERRORS:
        if actual is None:
            return {
                "type": "required",
                "field": field,
                "message": f"The '{field}' field cannot be null.",
            }
        return {
            "type": "number",
            "field": field,
            "message": f"The '{field}' field must be a number.",
            "actual": _echo(actual),
        }
    if kind == "greater_than_equal":
        minimum = ctx.get("ge")
        return {
            "type": "numberMin",
            "field": field,
            "message": f"The '{field}' field must be greater than or equal to {minimum}.",
            "expected": minimum,
            "actual": actual,
        }
    if kind == "date_pattern":
        return {
            "type": "datePattern",
            "field": field,
            "message": f"The '{field}' field must match the pattern {ctx.get('expected')}.",
            "expected": ctx.get("expected"),
            "actual": ctx.get("actual"),
        }
    if kind in {"model_type", "model_attributes_type", "dict_type"}:
        return {
            "type": "object",
            "field": field,
            "message": "The request body must be a JSON object.",
        }
    if kind == "json_invalid":
        return {
            "type": "json",
            "field": "body",
            "message": "The request body is not valid JSON.",
        }

    return {"type": kind or "invalid", "field": field, "message": error.get("msg", "Invalid value")}


def to_violations(errors: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    return [to_violation(e) for e in errors]


class PayloadValidator:
    """
    Validates payloads against an entity's create and update schemas.

    Args:
        create: Schema used for POST; required fields must be present.
        update: Schema used for PUT; every field optional, same rules.

    validate() returns a plain dict. For updates only the keys the client
    actually sent are returned, which is what gives PUT its partial-update
    semantics (an empty body changes nothing).
    """

    def __init__(self, create: Type[BaseModel], update: Type[BaseModel]):
        self._schemas: Dict[str, Type[BaseModel]] = {CREATE: create, UPDATE: update}

    def schema_for(self, operation: str) -> Type[BaseModel]:
        try:
            return self._schemas[operation]
        except KeyError:
            raise ValueError(f"Unknown validation operation '{operation}'") from None

    def validate(self, operation: str, payload: Optional[Any]) -> Dict[str, Any]:
        schema = self.schema_for(operation)
        if payload is None:
            payload = {}
        try:
            model = schema.model_validate(payload)
        except PydanticValidationError as exc:
            raise ValidationError(
                details=to_violations(exc.errors(include_url=False)),
                context={"schema": schema.__name__},
            ) from None
        return model.model_dump(exclude_unset=operation == UPDATE)
