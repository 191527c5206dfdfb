"""
In-memory imitation of the DummyJSON REST API.

Serves the same routes, shapes, status codes and error payloads as
https://dummyjson.com for the resources the suite covers (auth, products,
carts, users), backed by the seed files in data/. Like the real service it
never persists writes: POST/PUT/DELETE on carts answer as if they had
succeeded but leave the seed data untouched, so the server holds no mutable
state and can be shared by any number of concurrent scenarios.

Run it standalone:

    python mock_api.py            # http://127.0.0.1:5000, swagger at /docs

or from tests:

    server = serve_in_thread()
    ...
    server.shutdown()
"""
import threading
import uuid
from datetime import datetime, timedelta, timezone

from flask import Flask, request
from flask_restx import Api, Namespace, Resource, abort
from jose import JWTError, jwt
from werkzeug.serving import make_server

from load_data import load_all_data
from logging_helper import log_status
from models import Models

TOKEN_SECRET = "dummyjson-mock-secret"
TOKEN_ALGORITHM = "HS256"
ACCESS_TOKEN_MINS = 60
REFRESH_TOKEN_MINS = 60 * 24 * 30
DEFAULT_LIMIT = 30

# Namespaces
namespaces_config = {
    "auth": "Authentication",
    "products": "Products and categories",
    "carts": "Carts",
    "users": "Users",
}


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError:
        abort(400, f"Invalid '{name}' value: {raw}")
    if value < 0:
        abort(400, f"'{name}' must not be negative")
    return value


def paginate(key, items):
    skip = _int_arg("skip", 0)
    limit = _int_arg("limit", DEFAULT_LIMIT)
    page = items[skip:] if limit == 0 else items[skip:skip + limit]
    return {
        key: page,
        "total": len(items),
        "skip": skip,
        "limit": limit or len(page),
    }


def _json_body():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _lookup(obj, dotted_key):
    for part in dotted_key.split("."):
        if not isinstance(obj, dict) or part not in obj:
            return None
        obj = obj[part]
    return obj


# -----------------------------
# Tokens
# -----------------------------

def issue_token(user, kind, minutes):
    now = datetime.now(timezone.utc)
    claims = {
        "id": user["id"],
        "username": user["username"],
        "type": kind,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(claims, TOKEN_SECRET, algorithm=TOKEN_ALGORITHM)


def read_token(token, kind):
    """Returns the token claims, or None when the token is invalid, expired or of the wrong kind."""
    try:
        claims = jwt.decode(token, TOKEN_SECRET, algorithms=[TOKEN_ALGORITHM])
    except JWTError:
        return None
    if claims.get("type") != kind:
        return None
    return claims


def _expires_in(payload, default):
    minutes = payload.get("expiresInMins", default)
    if not _is_int(minutes) or minutes < 1:
        abort(400, "expiresInMins must be a positive integer")
    return minutes


# -----------------------------
# Application factory
# -----------------------------

def create_app(data=None):
    """
    Purpose:  Builds the Flask app. `data` is an optional (products, carts, users)
              tuple; by default the seed files are loaded with load_all_data().
    """
    products, carts, users = data if data is not None else load_all_data()
    products_by_id = {p["id"]: p for p in products}
    carts_by_id = {c["id"]: c for c in carts}
    users_by_id = {u["id"]: u for u in users}
    users_by_name = {u["username"]: u for u in users}

    app = Flask(__name__)
    app.url_map.strict_slashes = False
    app.config["RESTX_ERROR_404_HELP"] = False
    api = Api(app, version='1.0', title='DummyJSON Mock API',
              description='Offline stand-in for https://dummyjson.com', doc='/docs')
    models = Models(api)

    namespaces = {}
    for name, description in namespaces_config.items():
        ns = Namespace(name, description=description)
        namespaces[name] = ns
        api.add_namespace(ns)

    auth_ns = namespaces["auth"]
    product_ns = namespaces["products"]
    cart_ns = namespaces["carts"]
    user_ns = namespaces["users"]

    def find_or_404(items_by_id, label, item_id):
        obj = items_by_id.get(item_id)
        if obj is None:
            abort(404, f"{label} with id '{item_id}' not found")
        return obj

    def public_user(user):
        return {k: v for k, v in user.items() if k != "password"}

    # -- carts ------------------------------------------------------------
    def build_line(product, quantity):
        total = round(product["price"] * quantity, 2)
        return {
            "id": product["id"],
            "title": product["title"],
            "price": product["price"],
            "quantity": quantity,
            "total": total,
            "discountPercentage": product["discountPercentage"],
            "discountedTotal": round(total * (1 - product["discountPercentage"] / 100), 2),
            "thumbnail": product["thumbnail"],
        }

    def build_cart(cart_id, user_id, lines):
        built = [build_line(products_by_id[line["id"]], line["quantity"]) for line in lines]
        return {
            "id": cart_id,
            "products": built,
            "total": round(sum(line["total"] for line in built), 2),
            "discountedTotal": round(sum(line["discountedTotal"] for line in built), 2),
            "userId": user_id,
            "totalProducts": len(built),
            "totalQuantity": sum(line["quantity"] for line in built),
        }

    def stored_cart(cart):
        return build_cart(cart["id"], cart["userId"], cart["products"])

    def parse_lines(payload):
        lines = payload.get("products")
        if not isinstance(lines, list) or not lines:
            abort(400, "Products can not be empty")
        merged = {}
        for line in lines:
            if not isinstance(line, dict) or not _is_int(line.get("id")):
                abort(400, "Each product needs an integer 'id'")
            quantity = line.get("quantity", 1)
            if not _is_int(quantity) or quantity < 1:
                abort(400, f"Quantity for product '{line['id']}' must be a positive integer")
            find_or_404(products_by_id, "Product", line["id"])
            merged[line["id"]] = merged.get(line["id"], 0) + quantity
        return [{"id": pid, "quantity": qty} for pid, qty in merged.items()]

    # -- auth -------------------------------------------------------------
    def bearer_claims():
        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            abort(401, "Access Token is required")
        claims = read_token(token.strip(), "access")
        if claims is None:
            abort(401, "Invalid/expired Token!")
        return claims

    @auth_ns.route('/login')
    class Login(Resource):
        @auth_ns.expect(models.login_model)
        @auth_ns.response(400, 'Invalid or missing credentials')
        def post(self):
            payload = _json_body()
            username = payload.get("username")
            password = payload.get("password")
            if not username or not password:
                abort(400, "Username and password required")
            user = users_by_name.get(username)
            if user is None or user["password"] != password:
                abort(400, "Invalid credentials")
            minutes = _expires_in(payload, ACCESS_TOKEN_MINS)
            return {
                "id": user["id"],
                "username": user["username"],
                "email": user["email"],
                "firstName": user["firstName"],
                "lastName": user["lastName"],
                "gender": user["gender"],
                "image": user["image"],
                "accessToken": issue_token(user, "access", minutes),
                "refreshToken": issue_token(user, "refresh", REFRESH_TOKEN_MINS),
            }

    @auth_ns.route('/me')
    class Me(Resource):
        @auth_ns.response(401, 'Missing, invalid or expired token')
        def get(self):
            claims = bearer_claims()
            return public_user(find_or_404(users_by_id, "User", claims["id"]))

    @auth_ns.route('/refresh')
    class Refresh(Resource):
        @auth_ns.expect(models.refresh_model)
        @auth_ns.response(401, 'Missing or invalid refresh token')
        def post(self):
            payload = _json_body()
            token = payload.get("refreshToken")
            if not token:
                abort(401, "Refresh token required")
            claims = read_token(token, "refresh")
            if claims is None:
                abort(401, "Invalid refresh token")
            user = find_or_404(users_by_id, "User", claims["id"])
            minutes = _expires_in(payload, ACCESS_TOKEN_MINS)
            return {
                "accessToken": issue_token(user, "access", minutes),
                "refreshToken": issue_token(user, "refresh", REFRESH_TOKEN_MINS),
            }

    # -- products ---------------------------------------------------------
    @product_ns.route('/')
    class ProductList(Resource):
        def get(self):
            return paginate("products", products)

    @product_ns.route('/<int:product_id>')
    @product_ns.response(404, 'Product not found')
    class ProductItem(Resource):
        def get(self, product_id):
            return find_or_404(products_by_id, "Product", product_id)

    @product_ns.route('/search')
    class ProductSearch(Resource):
        def get(self):
            q = request.args.get("q", "").strip().lower()
            found = [
                p for p in products
                if q in p["title"].lower() or q in p["description"].lower()
            ]
            return paginate("products", found)

    @product_ns.route('/categories')
    class Categories(Resource):
        def get(self):
            root = request.url_root.rstrip("/")
            slugs = sorted({p["category"] for p in products})
            return [
                {
                    "slug": slug,
                    "name": slug.replace("-", " ").title(),
                    "url": f"{root}/products/category/{slug}",
                }
                for slug in slugs
            ]

    @product_ns.route('/category/<string:slug>')
    class ProductsByCategory(Resource):
        def get(self, slug):
            return paginate("products", [p for p in products if p["category"] == slug])

    # -- carts ------------------------------------------------------------
    @cart_ns.route('/')
    class CartList(Resource):
        def get(self):
            return paginate("carts", [stored_cart(c) for c in carts])

    @cart_ns.route('/add')
    class CartAdd(Resource):
        @cart_ns.expect(models.cart_add_model)
        @cart_ns.response(201, 'Cart created (not persisted)')
        def post(self):
            payload = _json_body()
            user_id = payload.get("userId")
            if not _is_int(user_id):
                abort(400, "User id is required")
            find_or_404(users_by_id, "User", user_id)
            lines = parse_lines(payload)
            return build_cart(len(carts) + 1, user_id, lines), 201

    @cart_ns.route('/<int:cart_id>')
    @cart_ns.response(404, 'Cart not found')
    class CartItem(Resource):
        def get(self, cart_id):
            return stored_cart(find_or_404(carts_by_id, "Cart", cart_id))

        @cart_ns.expect(models.cart_update_model)
        def put(self, cart_id):
            cart = find_or_404(carts_by_id, "Cart", cart_id)
            payload = _json_body()
            lines = parse_lines(payload)
            if payload.get("merge"):
                quantities = {line["id"]: line["quantity"] for line in cart["products"]}
                for line in lines:
                    quantities[line["id"]] = line["quantity"]
                lines = [{"id": pid, "quantity": qty} for pid, qty in quantities.items()]
            return build_cart(cart["id"], cart["userId"], lines)

        def delete(self, cart_id):
            deleted = stored_cart(find_or_404(carts_by_id, "Cart", cart_id))
            deleted["isDeleted"] = True
            deleted["deletedOn"] = datetime.now(timezone.utc).isoformat()
            return deleted

    @cart_ns.route('/user/<int:user_id>')
    class CartsByUser(Resource):
        def get(self, user_id):
            find_or_404(users_by_id, "User", user_id)
            return paginate("carts", [stored_cart(c) for c in carts if c["userId"] == user_id])

    # -- users ------------------------------------------------------------
    @user_ns.route('/')
    class UserList(Resource):
        def get(self):
            return paginate("users", [public_user(u) for u in users])

    @user_ns.route('/<int:user_id>')
    @user_ns.response(404, 'User not found')
    class UserItem(Resource):
        def get(self, user_id):
            return public_user(find_or_404(users_by_id, "User", user_id))

    @user_ns.route('/search')
    class UserSearch(Resource):
        def get(self):
            q = request.args.get("q", "").strip().lower()
            fields = ("firstName", "lastName", "maidenName", "username", "email")
            found = [
                public_user(u) for u in users
                if any(q in str(u.get(f, "")).lower() for f in fields)
            ]
            return paginate("users", found)

    @user_ns.route('/filter')
    class UserFilter(Resource):
        def get(self):
            key = request.args.get("key")
            value = request.args.get("value")
            if not key or value is None:
                abort(400, "Both 'key' and 'value' query parameters are required")
            found = [public_user(u) for u in users if str(_lookup(u, key)) == value]
            return paginate("users", found)

    return app


# -----------------------------
# Background server
# -----------------------------

class MockServer:
    """Runs an app on a werkzeug server in a daemon thread."""

    def __init__(self, app, host="127.0.0.1", port=0):
        self._server = make_server(host, port, app, threaded=True)
        self.host = host
        self.port = self._server.server_port
        self.url = f"http://{host}:{self.port}"
        self._thread = threading.Thread(target=self._server.serve_forever, name="mock-dummyjson", daemon=True)

    def start(self):
        self._thread.start()
        log_status("good", f"Mock DummyJSON API listening on {self.url}")
        return self

    def shutdown(self):
        self._server.shutdown()
        self._server.server_close()
        self._thread.join(timeout=5)
        log_status("info", f"Mock DummyJSON API on {self.url} stopped")


def serve_in_thread(app=None, host="127.0.0.1", port=0):
    return MockServer(app or create_app(), host=host, port=port).start()


if __name__ == '__main__':
    create_app().run(debug=True, port=5000)
