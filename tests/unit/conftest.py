"""Unit test conftest — no ASGI app, no network."""
import pytest


# Ensure app fixtures don't leak into unit tests
@pytest.fixture(autouse=True)
def _no_app_in_unit_tests(request):
    """Guard: unit tests must not use the app_client fixture."""
    if "app_client" in request.fixturenames:
        pytest.fail("Unit tests must not use app_client fixture. Use @pytest.mark.integration.")
