from __future__ import annotations

from typing import Any, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from catalog.domain.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys; serializes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def parse_payload(model: Type[ModelT], payload: Union[ModelT, Mapping[str, Any]]) -> ModelT:
    """Accept an already-validated model or a raw mapping."""
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        errors = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError("Invalid payload", errors) from exc
