import re

from marshmallow import fields, validate, validates, ValidationError

from .base import BaseSchema

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-zA-Z])(?=.*\d)")


class RegisterSchema(BaseSchema):
    first_name = fields.String(required=True, validate=validate.Length(min=1, max=50))
    last_name = fields.String(required=True, validate=validate.Length(min=1, max=50))
    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=8), load_only=True)

    @validates("password")
    def validate_password(self, value, **kwargs):
        if not PASSWORD_PATTERN.match(value):
            raise ValidationError("Password must contain at least one letter and one number")


class LoginSchema(BaseSchema):
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True)


class ProfileSchema(BaseSchema):
    first_name = fields.String(required=True, validate=validate.Length(min=1, max=50))
    last_name = fields.String(required=True, validate=validate.Length(min=1, max=50))
    email = fields.Email(required=True)
    username = fields.String(load_default=None, allow_none=True)

    @validates("username")
    def validate_username(self, value, **kwargs):
        if value and not 3 <= len(value) <= 30:
            raise ValidationError("Username must be between 3 and 30 characters")


class ChangePasswordSchema(BaseSchema):
    current_password = fields.String(required=True, data_key="currentPassword")
    new_password = fields.String(required=True, data_key="newPassword", validate=validate.Length(min=6))
