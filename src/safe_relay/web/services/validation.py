"""Request field validation."""

from pydantic import BaseModel

from safe_relay.errors import ValidationError


def validate_required_fields(body: BaseModel, required: list[str]) -> None:
    """Raise ValidationError naming every missing or empty field.

    Field names are given in wire (camelCase) form.
    """
    data = body.model_dump(by_alias=True)
    missing = [name for name in required if data.get(name) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
