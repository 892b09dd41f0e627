from typing import Dict, List, Mapping, Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..models.validation import ValidationFailure, ValidationResult, ValidationSuccess

M = TypeVar("M", bound=BaseModel)


def form_field_names(schema: Type[BaseModel]) -> List[str]:
    # Form names are the field aliases (customerId), falling back to the attribute name
    return [f.alias or name for name, f in schema.model_fields.items()]


def validate_form(schema: Type[M], raw: Mapping[str, Any], message: str) -> ValidationResult[M]:
    """
    Run `raw` through a pydantic schema.

    Fields missing from `raw` are passed as None so each field's own rule
    reports them. Every field is checked, so a Failure lists all invalid
    fields at once, each with its messages in the order the rules produced
    them. `message` is the fixed summary attached to any Failure.
    """
    data = dict(raw)
    for name, f in schema.model_fields.items():
        if name not in data and (f.alias or name) not in data:
            data[f.alias or name] = None
    try:
        return ValidationSuccess(schema.model_validate(data))
    except ValidationError as exc:
        aliases = {name: f.alias or name for name, f in schema.model_fields.items()}
        errors: Dict[str, List[str]] = {}
        for err in exc.errors():
            key = str(err["loc"][0]) if err["loc"] else "__root__"
            key = aliases.get(key, key)
            errors.setdefault(key, []).append(err["msg"])
        return ValidationFailure(errors=errors, message=message)
