from marshmallow import Schema, fields


class UsageSchema(Schema):
    current = fields.Int()
    limit = fields.Raw()  # int, or None for unlimited


class UserPermissionsSchema(Schema):
    role = fields.String()
    label = fields.String()
    permissions = fields.Dict(keys=fields.String(), values=fields.Boolean())
    quotas = fields.Dict(keys=fields.String(), values=fields.Nested(UsageSchema))
