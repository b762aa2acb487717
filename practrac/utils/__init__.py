from flask import request

from practrac.errors import BadRequestError


def load_json(schema):
    """Validate the request's JSON body with ``schema`` and return the result."""
    data = request.get_json(silent=True)
    if data is None:
        raise BadRequestError("Request body must be JSON")
    return schema.load(data)
