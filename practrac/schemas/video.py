from marshmallow import fields, validate

from practrac.models.video import VIDEO_CATEGORIES
from .base import BaseSchema


class VideoSchema(BaseSchema):
    title = fields.String(required=True, validate=validate.Length(min=1, max=100))
    category = fields.String(required=True, validate=validate.OneOf(VIDEO_CATEGORIES))
    duration = fields.String(required=True, validate=validate.Length(min=1, max=20))
    description = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=1000))
    thumbnail = fields.Url(load_default=None, allow_none=True)
    video_url = fields.Url(load_default=None, allow_none=True, data_key="videoUrl")
