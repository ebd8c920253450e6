import os
import tempfile
from types import SimpleNamespace
from unittest.mock import patch

import pytest

# Set test environment variables
os.environ["TESTING"] = "true"

TEST_ENV = {
    "STRIPE_SECRET_KEY": "sk_test_dummy_key_for_testing",
    "STRIPE_PRICE_STARTER": "price_starter_test",
    "STRIPE_PRICE_GROWTH": "price_growth_test",
    "STRIPE_PRICE_PRO": "price_pro_test",
    "SITE_BASE_URL": "https://devrewoh.test",
    "APP_VERSION": "1.0.0",
}


@pytest.fixture
def app():
    """Create and configure a new app instance for each test."""
    db_fd, db_path = tempfile.mkstemp(suffix=".db")
    with patch.dict(os.environ, {**TEST_ENV, "DATABASE_URL": f"sqlite:///{db_path}"}):
        from portfolio.factory import create_app
        from portfolio.infra.db import db
        app = create_app()
        with app.app_context():
            yield app
            db.session.remove()
            db.drop_all()
            db.engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def config(app):
    from portfolio.config import get_config
    return get_config()


def make_checkout_session(session_id="cs_test_123"):
    """Stand-in for the object stripe.checkout.Session.create returns."""
    return SimpleNamespace(
        id=session_id,
        url=f"https://checkout.stripe.com/c/pay/{session_id}",
    )


def make_paid_session(amount_total=1000, email="buyer@example.com", session_id="cs_test_123"):
    """Stand-in for a retrieved, paid Checkout session."""
    return SimpleNamespace(
        id=session_id,
        amount_total=amount_total,
        customer_details=SimpleNamespace(email=email),
        customer_email=None,
    )
