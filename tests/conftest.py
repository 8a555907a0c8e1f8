import os
import tempfile
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Settings in ``storefront.config`` are read at import time, so the
    environment has to be in place before any storefront module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("STOREFRONT_BCRYPT_ROUNDS", "4")
    os.environ.setdefault("STOREFRONT_EMAIL_BACKEND", "fake")
    os.environ.setdefault("STOREFRONT_UPLOAD_DIR", tempfile.mkdtemp(prefix="storefront-uploads-"))


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def mailer():
    """A fresh FakeEmailAdapter for every test."""
    from storefront.mail import get_mailer, reset_mailer

    reset_mailer()
    yield get_mailer()
    reset_mailer()


@pytest.fixture()
def make_product():
    """Persist a product and return it; keyword arguments override the defaults."""
    from protean.utils.globals import current_domain
    from storefront.product.product import Product

    def _make(**overrides):
        defaults = {"name": "Desk Lamp", "price": 10.0, "stock": 5, "category": "Home"}
        defaults.update(overrides)
        product = Product.create(**defaults)
        current_domain.repository_for(Product).add(product)
        return current_domain.repository_for(Product).get(product.id)

    return _make


@pytest.fixture()
def make_user():
    """Register a user (with cart) and return the persisted User."""
    from protean.utils.globals import current_domain
    from storefront.user.registration import RegisterUser
    from storefront.user.user import User

    def _make(email="ada@example.com", password="s3cret-pass", role="user", **extra):
        payload = current_domain.process(
            RegisterUser(email=email, password=password, role=role, **extra),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(payload["id"])

    return _make
