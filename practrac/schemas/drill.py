import json
from numbers import Number

from marshmallow import fields, validate, validates, validates_schema, ValidationError

from practrac.models.drill import DRILL_CATEGORIES
from .base import BaseSchema

# Required numeric keys per court diagram element collection
DIAGRAM_ELEMENT_KEYS = {
    "players": ("x", "y"),
    "arrows": ("startX", "startY", "endX", "endY"),
    "textLabels": ("x", "y"),
}


def _is_number(value):
    return isinstance(value, Number) and not isinstance(value, bool)


def normalize_court_diagram(value):
    """Validate a court diagram and return it as a dict.

    Accepts the dict the diagram editor produces or its JSON-encoded string.
    Each collection is a list of elements with numeric canvas coordinates;
    players also carry a ``type`` and text labels a ``text``.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValidationError("Court diagram must be valid JSON")
    if not isinstance(value, dict):
        raise ValidationError("Court diagram must be an object")

    diagram = dict(value)
    for collection, keys in DIAGRAM_ELEMENT_KEYS.items():
        elements = diagram.get(collection, [])
        if not isinstance(elements, list):
            raise ValidationError(f"Court diagram {collection} must be a list")
        for element in elements:
            if not isinstance(element, dict):
                raise ValidationError(f"Court diagram {collection} entries must be objects")
            if not all(_is_number(element.get(key)) for key in keys):
                raise ValidationError(f"Court diagram {collection} entries need numeric {', '.join(keys)}")
        diagram[collection] = elements

    if any(not player.get("type") for player in diagram["players"]):
        raise ValidationError("Court diagram players need a type")
    if any(not isinstance(label.get("text"), str) or not label["text"].strip() for label in diagram["textLabels"]):
        raise ValidationError("Court diagram text labels need text")
    return diagram


class DrillSchema(BaseSchema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    category = fields.String(required=True, validate=validate.OneOf(DRILL_CATEGORIES))
    duration = fields.Integer(required=True, validate=validate.Range(min=1, max=120))
    difficulty = fields.Integer(required=True, validate=validate.Range(min=1, max=5))
    description = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=1000))
    equipment = fields.List(fields.String(), load_default=list)
    min_players = fields.Integer(required=True, data_key="minPlayers", validate=validate.Range(min=1, max=50))
    max_players = fields.Integer(required=True, data_key="maxPlayers", validate=validate.Range(min=1, max=50))
    focus = fields.List(fields.String(), load_default=list)
    is_public = fields.Boolean(load_default=False, data_key="isPublic")
    court_diagram = fields.Raw(load_default=None, allow_none=True, data_key="courtDiagram")

    @validates("court_diagram")
    def validate_court_diagram(self, value, **kwargs):
        normalize_court_diagram(value)

    @validates_schema
    def validate_player_range(self, data, **kwargs):
        if data.get("min_players") and data.get("max_players") and data["min_players"] > data["max_players"]:
            raise ValidationError("minPlayers cannot exceed maxPlayers", "minPlayers")
