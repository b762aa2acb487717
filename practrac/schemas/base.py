import re

from marshmallow import EXCLUDE, pre_load

from practrac.extensions import ma


def to_camel(name):
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_snake(name):
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class BaseSchema(ma.Schema):
    """Load schema that accepts snake_case aliases for camelCase wire keys."""

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def accept_key_aliases(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        wire_keys = {field.data_key or name for name, field in self.load_fields.items()}
        normalized = {}
        for key, value in data.items():
            if key not in wire_keys:
                for alias in (to_camel(key), to_snake(key)):
                    if alias in wire_keys and alias not in data:
                        key = alias
                        break
            normalized[key] = value
        return normalized
