from datetime import date

from marshmallow import ValidationError, validate, validates

from learning_log import ma


# -------
# Schemas
# -------

class NewEntrySchema(ma.Schema):
    """Schema defining the attributes when creating an entry."""
    title = ma.String(required=True)
    content = ma.String(required=True)
    tags = ma.List(ma.String(), load_default=list)
    date = ma.Date(load_default=date.today)
    image = ma.String(allow_none=True, load_default=None)

    @validates('title')
    def validate_title(self, value, **kwargs):
        if not value.strip():
            raise ValidationError('Title cannot be blank.')


class UpdateEntrySchema(NewEntrySchema):
    """Schema defining the attributes when updating an entry; tags and date left out keep their value."""
    tags = ma.List(ma.String())
    date = ma.Date()


class EntrySchema(ma.Schema):
    """Schema defining the attributes in an entry."""
    id = ma.Integer()
    title = ma.String()
    content = ma.String()
    tags = ma.List(ma.String())
    date = ma.Date()
    image = ma.String(allow_none=True)
    user_id = ma.Integer(allow_none=True)
    created_on = ma.DateTime()
    last_edited_on = ma.DateTime()


class MessageSchema(ma.Schema):
    """Schema defining a confirmation message."""
    message = ma.String()


class NewUserSchema(ma.Schema):
    """Schema defining the attributes when registering a new user."""
    username = ma.String(required=True, validate=validate.Length(min=1))
    email = ma.String(required=True, validate=validate.Email())
    password = ma.String(required=True, validate=validate.Length(min=1), load_only=True)


class LoginSchema(ma.Schema):
    """Schema defining the attributes when logging in."""
    email = ma.String(required=True)
    password = ma.String(required=True, load_only=True)


class UserSchema(ma.Schema):
    """Schema defining the attributes of a user."""
    id = ma.Integer()
    username = ma.String()
    email = ma.String()
    registered_on = ma.DateTime()


class TokenSchema(ma.Schema):
    """Schema defining the attributes returned when a user authenticates."""
    token = ma.String()
    user = ma.Nested(UserSchema)
