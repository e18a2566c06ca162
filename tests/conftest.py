"""Shared pytest configuration.

The fakecheck plugin is normally registered through its pytest11 entry
point; running from a source checkout registers it here instead.
"""

import pytest

import fakecheck.presentation.pytest_plugin as fakecheck_plugin

pytest_plugins = ["pytester"]


def pytest_configure(config: pytest.Config) -> None:
    """Register the fakecheck plugin unless the entry point already did."""
    if not config.pluginmanager.is_registered(fakecheck_plugin):
        config.pluginmanager.register(fakecheck_plugin, "fakecheck")
