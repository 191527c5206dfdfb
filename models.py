from flask_restx import fields


class Models:
    def __init__(self, api):
        self.api = api

        self.login_model = api.model('LoginRequest', {
            'username': fields.String(required=True, description='Account username'),
            'password': fields.String(required=True, description='Account password'),
            'expiresInMins': fields.Integer(description='Access token lifetime in minutes (default 60)'),
        })

        self.refresh_model = api.model('RefreshRequest', {
            'refreshToken': fields.String(description='Refresh token issued by /auth/login'),
            'expiresInMins': fields.Integer(description='New access token lifetime in minutes'),
        })

        self.cart_line_model = api.model('CartLine', {
            'id': fields.Integer(required=True, description='Product ID'),
            'quantity': fields.Integer(required=True, description='Units of the product'),
        })

        self.cart_add_model = api.model('CartAdd', {
            'userId': fields.Integer(required=True, description='Owner of the new cart'),
            'products': fields.List(fields.Nested(self.cart_line_model), required=True),
        })

        self.cart_update_model = api.model('CartUpdate', {
            'merge': fields.Boolean(description='Keep existing lines and add/update the given ones'),
            'products': fields.List(fields.Nested(self.cart_line_model), required=True),
        })
