"""Test configuration and fixtures."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from spn_scripts.errors import AssignmentError, ProviderError
from spn_scripts.models import CreatedPrincipal, PasswordWindow


def pytest_configure(config):
    """Configure pytest with custom settings."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class FakeIdentityProvider:
    """Records create calls; fails for names listed in fail_names."""

    def __init__(self, fail_names=()):
        self.fail_names = set(fail_names)
        self.calls = []

    async def create_principal(self, display_name, password_credential=None):
        self.calls.append((display_name, password_credential))
        if display_name in self.fail_names:
            raise ProviderError(f"Cannot create {display_name}", code="Request_BadRequest")
        n = len(self.calls)
        return CreatedPrincipal(
            display_name=display_name,
            app_id=f"app-{n}",
            object_id=f"sp-{n}",
            application_object_id=f"obj-{n}",
            secret=f"secret-{n}",
            start=password_credential.window.start if password_credential else None,
            end=password_credential.window.end if password_credential else None,
        )


class FakeRoleAssigner:

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    async def assign_default_role(self, principals):
        self.calls.append(list(principals))
        if self.fail:
            raise AssignmentError("Role 'Contributor' not found", failed_names=[p.display_name for p in principals])


@pytest.fixture
def fixed_window():
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return PasswordWindow(start=start, end=start + timedelta(days=365))


@pytest.fixture
def window_factory(fixed_window):
    return lambda: fixed_window


@pytest.fixture
def provider():
    return FakeIdentityProvider()


@pytest.fixture
def role_assigner():
    return FakeRoleAssigner()
