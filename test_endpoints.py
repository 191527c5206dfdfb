from dataclasses import FrozenInstanceError

import pytest

import endpoints
from endpoints import ENDPOINTS


def test_fixed_paths():
    assert ENDPOINTS.auth.login == "/auth/login"
    assert ENDPOINTS.auth.me == "/auth/me"
    assert ENDPOINTS.products.base == "/products"
    assert ENDPOINTS.products.search == "/products/search"
    assert ENDPOINTS.products.categories == "/products/categories"
    assert ENDPOINTS.carts.base == "/carts"
    assert ENDPOINTS.carts.add == "/carts/add"


@pytest.mark.parametrize("built, expected", [
    (ENDPOINTS.products.single(1), "/products/1"),
    (ENDPOINTS.products.category("smartphones"), "/products/category/smartphones"),
    (ENDPOINTS.carts.single(7), "/carts/7"),
    (ENDPOINTS.carts.user(5), "/carts/user/5"),
    (ENDPOINTS.carts.update(3), "/carts/3"),
    (ENDPOINTS.carts.delete(3), "/carts/3"),
    (ENDPOINTS.users.single(2), "/users/2"),
])
def test_parameterized_paths(built, expected):
    assert built == expected


def test_query_paths_are_encoded():
    assert ENDPOINTS.products.search_for("phone") == "/products/search?q=phone"
    assert ENDPOINTS.products.search_for("smart phone&x") == "/products/search?q=smart+phone%26x"
    assert ENDPOINTS.products.limit(5) == "/products?limit=5"
    assert ENDPOINTS.products.skip(10, 5) == "/products?skip=10&limit=5"
    assert ENDPOINTS.users.filter_by("hair.color", "Brown") == "/users/filter?key=hair.color&value=Brown"


def test_category_slug_is_quoted():
    assert ENDPOINTS.products.category("home decoration") == "/products/category/home%20decoration"


def test_builders_are_deterministic():
    assert ENDPOINTS.products.single(42) == ENDPOINTS.products.single(42)
    assert ENDPOINTS.carts.user(1) == endpoints.carts.user(1)


@pytest.mark.parametrize("group, attr", [
    (ENDPOINTS.auth, "login"),
    (ENDPOINTS.products, "base"),
    (ENDPOINTS.carts, "add"),
    (ENDPOINTS, "products"),
])
def test_catalog_is_immutable(group, attr):
    with pytest.raises(FrozenInstanceError):
        setattr(group, attr, "/elsewhere")


def test_module_aliases_point_at_catalog():
    assert endpoints.auth is ENDPOINTS.auth
    assert endpoints.products is ENDPOINTS.products
    assert endpoints.carts is ENDPOINTS.carts
    assert endpoints.users is ENDPOINTS.users
