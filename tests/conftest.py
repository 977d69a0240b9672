import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain module is first imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("BCRYPT_ROUNDS", "4")

    from storefront.domain import init_storefront

    init_storefront()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain():
    """The storefront domain, initialized in ``pytest_sessionstart``."""
    from storefront.domain import storefront

    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    from storefront.payments.gateway import reset_gateways

    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    reset_gateways()
    ctx.pop()


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    """Send uploaded files to a per-test directory."""
    directory = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_DIR", str(directory))
    return directory


@pytest.fixture()
def app(_storefront_domain, upload_dir):
    from storefront.api.application import create_app

    return create_app(_storefront_domain)


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


# ---------------------------------------------------------------------------
# Catalogue and identity helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Create a product through its command and return its id."""
    from protean.utils.globals import current_domain
    from storefront.catalogue.product.creation import CreateProduct

    def _make(title="Widget", price=10.0, **overrides):
        command = CreateProduct(title=title, price=price, **overrides)
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_user():
    """Register a user through its command and return its id."""
    from protean.utils.globals import current_domain
    from storefront.identity.user.registration import RegisterUser

    def _make(name="Jane Doe", email="jane@example.com", password="s3cret!", **overrides):
        command = RegisterUser(name=name, email=email, password=password, **overrides)
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def admin_headers(make_user):
    from storefront.utils.security import issue_token

    admin_id = make_user(name="Admin", email="admin@example.com", role="admin")
    return {"Authorization": f"Bearer {issue_token(admin_id)}"}


@pytest.fixture()
def user_headers(make_user):
    from storefront.utils.security import issue_token

    user_id = make_user(name="Shopper", email="shopper@example.com")
    return {"Authorization": f"Bearer {issue_token(user_id)}"}
