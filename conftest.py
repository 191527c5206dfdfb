import pytest

import api_helpers
from mock_api import serve_in_thread
from settings import get_settings


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run scenarios against API_BASE_URL (default https://dummyjson.com) instead of the local mock",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "contract: response shape validated against a schema contract")
    config.addinivalue_line("markers", "e2e: multi-call scenario chaining data between requests")
    config.addinivalue_line("markers", "live: needs the real API; skipped unless --live or API_BASE_URL is given")


def pytest_collection_modifyitems(config, items):
    if _targets_live_api(config):
        return
    skip_live = pytest.mark.skip(reason="needs --live or API_BASE_URL")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def _targets_live_api(config):
    return config.getoption("--live") or get_settings().base_url is not None


@pytest.fixture(scope="session")
def mock_server():
    server = serve_in_thread()
    yield server
    server.shutdown()


@pytest.fixture(scope="session")
def api_base_url(request):
    """
    Purpose:  Base URL every scenario talks to.

    - --live or API_BASE_URL set → api_helpers.get_base_url() (the real API)
    - otherwise → a mock DummyJSON server started once for the session
    """
    if _targets_live_api(request.config):
        return api_helpers.get_base_url()
    return request.getfixturevalue("mock_server").url


@pytest.fixture(params=api_helpers.BACKENDS)
def backend(request):
    return request.param


@pytest.fixture
def client_config(api_base_url, backend):
    return api_helpers.ClientConfig(base_url=api_base_url, backend=backend)


@pytest.fixture
def api_client(client_config):
    """A fresh unauthenticated client per scenario, released at teardown."""
    client = api_helpers.create_client(client_config)
    yield client
    client.close()


@pytest.fixture
def logged_in_user(api_client):
    """Logs in as emilys and returns the validated login body."""
    return api_helpers.authenticate(api_client, "emilys", api_helpers.DEMO_USERS["emilys"])


@pytest.fixture
def auth_client(client_config, logged_in_user):
    """A client carrying emilys' bearer token, released at teardown."""
    client = api_helpers.create_authenticated_client(logged_in_user["accessToken"], client_config)
    yield client
    client.close()
