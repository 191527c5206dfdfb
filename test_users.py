import pytest
from hamcrest import (
    assert_that, contains_string, equal_to, greater_than, has_entries,
    has_entry, has_item, has_length, only_contains,
)

import contracts
from endpoints import ENDPOINTS


@pytest.mark.contract
def test_list_users(api_client):
    resp = api_client.get(ENDPOINTS.users.base)
    assert_that(resp.status, equal_to(200), f"Body: {resp.text}")

    page = contracts.USER_LIST.parse(resp.body)
    assert_that(page["users"], has_length(greater_than(0)))
    assert_that(page["skip"], equal_to(0))


@pytest.mark.contract
def test_get_user_by_id(api_client):
    resp = api_client.get(ENDPOINTS.users.single(1))
    assert_that(resp.status, equal_to(200), f"Body: {resp.text}")

    user = contracts.USER.parse(resp.body)
    assert_that(user, has_entries(id=1, username="emilys"))
    assert_that(user["email"], contains_string("@"))


def test_get_user_by_id_404(api_client):
    resp = api_client.get(ENDPOINTS.users.single(99999))
    assert_that(resp.status, equal_to(404), f"Body: {resp.text}")
    contracts.ERROR.parse(resp.body)


def test_search_users(api_client):
    resp = api_client.get(ENDPOINTS.users.search_for("Emily"))
    assert_that(resp.status, equal_to(200), f"Body: {resp.text}")

    page = contracts.USER_LIST.parse(resp.body)
    assert_that(page["users"], has_item(has_entry("username", "emilys")))


@pytest.mark.parametrize("color", ["Brown", "Green"])
def test_filter_users_by_hair_color(api_client, color):
    resp = api_client.get(ENDPOINTS.users.filter_by("hair.color", color))
    assert_that(resp.status, equal_to(200), f"Body: {resp.text}")

    page = contracts.USER_LIST.parse(resp.body)
    assert_that(page["users"], has_length(greater_than(0)))
    assert_that(page["users"], only_contains(has_entry("hair", has_entry("color", color))))


def test_user_id_from_login_owns_their_carts(api_client, logged_in_user):
    resp = api_client.get(ENDPOINTS.carts.user(logged_in_user["id"]))
    assert_that(resp.status, equal_to(200), f"Body: {resp.text}")
    page = contracts.CART_LIST.parse(resp.body)
    if page["carts"]:
        assert_that(page["carts"], only_contains(has_entries(userId=logged_in_user["id"])))


def test_me_matches_user_record(auth_client, api_client, logged_in_user):
    me = contracts.USER.parse(auth_client.get(ENDPOINTS.auth.me).body)
    record = contracts.USER.parse(api_client.get(ENDPOINTS.users.single(logged_in_user["id"])).body)
    for key in ("id", "username", "email", "firstName", "lastName"):
        assert_that(me[key], equal_to(record[key]))
