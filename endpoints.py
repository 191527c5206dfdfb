"""
Endpoint catalog for the DummyJSON API.

Paths are grouped by resource domain. Fixed entries are plain strings,
parameterized entries are pure methods that build a path from their
arguments. Every group is a frozen dataclass so nothing here can be
reassigned at runtime:

    from endpoints import ENDPOINTS
    ENDPOINTS.products.single(1)          # "/products/1"
    ENDPOINTS.carts.user(5)               # "/carts/user/5"
"""
from dataclasses import dataclass, field
from urllib.parse import quote, urlencode


def _query(path: str, **params) -> str:
    return f"{path}?{urlencode(params)}"


@dataclass(frozen=True)
class AuthEndpoints:
    login: str = "/auth/login"
    me: str = "/auth/me"
    refresh: str = "/auth/refresh"


@dataclass(frozen=True)
class ProductEndpoints:
    base: str = "/products"
    search: str = "/products/search"
    categories: str = "/products/categories"

    def single(self, product_id: int) -> str:
        return f"{self.base}/{product_id}"

    def search_for(self, q: str) -> str:
        return _query(self.search, q=q)

    def category(self, slug: str) -> str:
        return f"{self.base}/category/{quote(slug)}"

    def limit(self, limit: int) -> str:
        return _query(self.base, limit=limit)

    def skip(self, skip: int, limit: int) -> str:
        return _query(self.base, skip=skip, limit=limit)


@dataclass(frozen=True)
class CartEndpoints:
    base: str = "/carts"
    add: str = "/carts/add"

    def single(self, cart_id: int) -> str:
        return f"{self.base}/{cart_id}"

    def user(self, user_id: int) -> str:
        return f"{self.base}/user/{user_id}"

    def update(self, cart_id: int) -> str:
        return self.single(cart_id)

    def delete(self, cart_id: int) -> str:
        return self.single(cart_id)


@dataclass(frozen=True)
class UserEndpoints:
    base: str = "/users"
    search: str = "/users/search"
    filter: str = "/users/filter"

    def single(self, user_id: int) -> str:
        return f"{self.base}/{user_id}"

    def search_for(self, q: str) -> str:
        return _query(self.search, q=q)

    def filter_by(self, key: str, value: str) -> str:
        return _query(self.filter, key=key, value=value)


@dataclass(frozen=True)
class Endpoints:
    auth: AuthEndpoints = field(default_factory=AuthEndpoints)
    products: ProductEndpoints = field(default_factory=ProductEndpoints)
    carts: CartEndpoints = field(default_factory=CartEndpoints)
    users: UserEndpoints = field(default_factory=UserEndpoints)


ENDPOINTS = Endpoints()

auth = ENDPOINTS.auth
products = ENDPOINTS.products
carts = ENDPOINTS.carts
users = ENDPOINTS.users
