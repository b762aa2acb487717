from marshmallow import fields, validate

from practrac.models.player import POSITIONS
from .base import BaseSchema


class PlayerSchema(BaseSchema):
    first_name = fields.String(required=True, data_key="firstName", validate=validate.Length(min=1, max=50))
    last_name = fields.String(required=True, data_key="lastName", validate=validate.Length(min=1, max=50))
    jersey_number = fields.Integer(required=True, data_key="jerseyNumber", validate=validate.Range(min=0, max=99))
    position = fields.String(required=True, validate=validate.OneOf(POSITIONS))
    skill_level = fields.Integer(required=True, data_key="skillLevel", validate=validate.Range(min=1, max=5))
    height = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=10))
    year = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=20))


class PlayerStatsSchema(BaseSchema):
    season = fields.String(load_default=None, allow_none=True, validate=validate.Length(min=1, max=50))
    kills = fields.Integer(load_default=0, validate=validate.Range(min=0))
    blocks = fields.Integer(load_default=0, validate=validate.Range(min=0))
    aces = fields.Integer(load_default=0, validate=validate.Range(min=0))
    digs = fields.Integer(load_default=0, validate=validate.Range(min=0))
    assists = fields.Integer(load_default=0, validate=validate.Range(min=0))
