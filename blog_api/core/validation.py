"""Request-body models and their client-facing error messages.

Each accepted body shape is a pydantic model; fields are validated in
declaration order and only the first violation is reported. Unknown keys are
ignored. The ``*Changes`` models back partial updates: every field is
optional, but a field that is present is checked exactly like on creation.
"""

from collections.abc import Mapping, Sequence
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    StrictStr,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import ErrorDetails, PydanticCustomError

from blog_api.core.errors import BadRequestError

# Identifiers are stored as 32-bit INTEGER columns.
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; JSON true/false is not a number.
    if isinstance(value, bool):
        raise PydanticCustomError("int_type", "Input should be a valid integer")
    return value


NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
RecordId = Annotated[int, BeforeValidator(_reject_bool), Field(ge=MIN_ID, le=MAX_ID)]


class _Body(BaseModel):
    """Base for request bodies: camelCase keys in, unknown keys dropped."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class UserBody(_Body):
    """Body of a user creation request."""

    first_name: NonEmptyStr
    last_name: NonEmptyStr
    email: EmailStr


class UserChanges(_Body):
    """Body of a user update request. The email address is immutable."""

    first_name: NonEmptyStr = None
    last_name: NonEmptyStr = None

    @model_validator(mode="before")
    @classmethod
    def _email_is_immutable(cls, data: Any) -> Any:
        reject_immutable_fields(data, USER_IMMUTABLE_FIELDS)
        return data


class PostBody(_Body):
    """Body of a post creation request."""

    title: NonEmptyStr
    description: NonEmptyStr
    user_id: RecordId | None = None


class PostChanges(_Body):
    """Body of a post update request."""

    title: NonEmptyStr = None
    description: NonEmptyStr = None
    user_id: RecordId | None = None


USER_IMMUTABLE_FIELDS: tuple[str, ...] = ("email",)

# pydantic error type -> message suffix
_MESSAGES: dict[str, str] = {
    "model_type": "must be of type object",
    "model_attributes_type": "must be of type object",
    "dict_type": "must be of type object",
    "missing": "is required",
    "string_type": "must be a string",
    "string_too_short": "is not allowed to be empty",
    "value_error": "must be a valid email",
    "int_type": "must be a number",
    "int_parsing": "must be a number",
    "finite_number": "must be a number",
    "int_from_float": "must be an integer",
    "greater_than_equal": "must be a safe number",
    "less_than_equal": "must be a safe number",
    "int_parsing_size": "must be a safe number",
}

_REQUEST_LOCATIONS = {"body", "path", "query", "header", "cookie"}


def describe_violation(error: ErrorDetails | Mapping[str, Any]) -> str:
    """Client-facing message for one pydantic error entry."""
    if error["type"] == "immutable_field":
        return error["msg"]

    names = [
        str(part)
        for part in error.get("loc", ())
        if not (isinstance(part, str) and part in _REQUEST_LOCATIONS)
    ]
    name = names[0] if names else "value"

    suffix = _MESSAGES.get(error["type"])
    if suffix is None:
        return f'"{name}" is invalid: {error.get("msg", "invalid value")}'
    return f'"{name}" {suffix}'


def reject_immutable_fields(payload: Any, fields: Sequence[str]) -> None:
    """Fail validation if the body tries to set an immutable field."""
    if not isinstance(payload, Mapping):
        return
    for name in fields:
        if name in payload:
            raise PydanticCustomError(
                "immutable_field",
                "{field} field cannot be modified",
                {"field": name.capitalize()},
            )


def validate(payload: Any, model: type[BaseModel]) -> dict[str, Any]:
    """Validate ``payload`` against ``model``.

    Returns:
        The fields present in the body, keyed by attribute name.

    Raises:
        BadRequestError: Describing the first violation found.
    """
    try:
        body = model.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError(describe_violation(e.errors()[0])) from None
    return body.model_dump(exclude_unset=True)


def validate_user(payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """Validate a user body: ``firstName``, ``lastName`` and ``email``."""
    return validate(payload, UserChanges if partial else UserBody)


def validate_post(payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """Validate a post body: ``title``, ``description`` and optional ``userId``."""
    return validate(payload, PostChanges if partial else PostBody)
