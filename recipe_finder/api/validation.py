"""Request body validation for Flask views.

The @validate_request decorator parses the request body into the Pydantic
model named by the view's parameter annotation and passes the instance in.
Path parameters (present in request.view_args) are passed through unchanged.

On failure it raises ValidationError with details:
- model:    Name of the Pydantic model
- received: Request payload, with password fields masked
- errors:   One {field, message, expected_type} entry per violation
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

SENSITIVE_FIELDS = {"password", "password_confirmation"}
MASK = "********"


def _request_payload():
    """Return the JSON body, or form data for non-JSON requests."""
    if request.is_json:
        payload = request.get_json(silent=True)
        return {} if payload is None else payload
    return request.form.to_dict()


def _mask(payload):
    if not isinstance(payload, dict):
        return payload
    return {
        key: MASK if key in SENSITIVE_FIELDS else value
        for key, value in payload.items()
    }


def _expected_type(model: type[BaseModel], loc: tuple) -> str:
    if not loc:
        return model.__name__
    field = model.model_fields.get(str(loc[0]))
    if field is None:
        return "unknown"
    return getattr(field.annotation, "__name__", str(field.annotation))


def format_errors(model: type[BaseModel], errors: list[dict]) -> list[dict]:
    """Turn Pydantic error dicts into the field-keyed error list."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": _expected_type(model, err["loc"]),
        }
        for err in errors
    ]


def validate_request(f):
    """
    Decorator validating the request body against a Pydantic model.

    Example:
    ```python
    @auth_bp.route("/login", methods=["POST"])
    @validate_request
    def login(data: UserLogin):
        ...
    ```

    Raises:
        TypeError: At decoration time if the view has no parameters or its
            first parameter lacks an annotation; at request time if a body
            parameter is not annotated with a BaseModel subclass
        ValidationError: If the body does not satisfy the model
    """
    params = list(inspect.signature(f).parameters.values())
    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")
    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(
            f"First parameter '{params[0].name}' of {f.__name__} lacks a type annotation"
        )

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}

        for param in params:
            if param.name in view_args or param.name in kwargs:
                continue

            model = param.annotation
            if not (isinstance(model, type) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            payload = _request_payload()
            try:
                kwargs[param.name] = model.model_validate(payload)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _mask(payload),
                        "errors": format_errors(model, e.errors()),
                    }
                )

        return f(*args, **kwargs)

    return wrapper
