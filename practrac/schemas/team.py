from marshmallow import fields, validate

from .base import BaseSchema


class TeamSchema(BaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    season = fields.String(required=True, validate=validate.Length(min=1, max=50))
    division = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=50))
    description = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=500))
