import pytest

from service_orders.policy import get_engine


@pytest.fixture(autouse=True)
def _fresh_policy_engine(settings):
    # get_engine() memoizes the configured domain; tests that override
    # ORGANIZATION_EMAIL_DOMAIN must see a new engine.
    settings.ORGANIZATION_EMAIL_DOMAIN = "@starnav.com.br"
    get_engine.cache_clear()
    yield
    get_engine.cache_clear()
