"""Request helpers shared by the JSON blueprints."""
from flask import request

from hardware_shop.exceptions import ValidationError


def get_json_body():
    """
    Return the request's JSON object body.

    Raises:
        ValidationError: if the body is present but is not a JSON object.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
