from marshmallow import fields, validate

from practrac.models.practice import PHASE_TYPES
from .base import BaseSchema


class PhaseSchema(BaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    duration = fields.Integer(required=True, validate=validate.Range(min=1, max=120))
    type = fields.String(required=True, validate=validate.OneOf(PHASE_TYPES))
    objective = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=500))
    drills = fields.List(fields.Integer(), load_default=list)


class PracticeSchema(BaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    date = fields.Date(required=True)
    duration = fields.Integer(required=True, validate=validate.Range(min=1, max=480))
    objective = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=500))
    phases = fields.List(fields.Nested(PhaseSchema), load_default=list)
