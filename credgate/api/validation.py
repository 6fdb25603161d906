"""Request validation decorator.

@validate_request parses the request body into the pydantic model named by
the view's annotated parameter and passes it in as that argument. Path
parameters pass through untouched.
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import ValidationError


def _find_model_param(f) -> tuple[str, type[BaseModel]] | None:
    for name, param in inspect.signature(f).parameters.items():
        annotation = param.annotation
        if inspect.isclass(annotation) and issubclass(annotation, BaseModel):
            return name, annotation
    return None


def _request_data() -> dict | None:
    # JSON bodies and HTML form posts are both accepted
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else None
    if request.form:
        return request.form.to_dict()
    return None


def validate_request(f):
    """
    Validate the request body against the view's pydantic parameter.

    Raises:
        ValidationError: If the body is missing, not an object, or fails
            schema validation. Details carry the pydantic errors without
            echoing input values.
    """
    model_param = _find_model_param(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        if model_param is None:
            return f(*args, **kwargs)

        name, model = model_param
        data = _request_data()
        if data is None:
            raise ValidationError(
                "Request body is required",
                {"expected": "JSON object"}
            )

        try:
            kwargs[name] = model(**data)
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid request data",
                {"errors": e.errors(include_url=False, include_context=False, include_input=False)}
            )

        return f(*args, **kwargs)

    return wrapper
