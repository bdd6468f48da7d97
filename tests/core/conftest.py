"""Pytest fixtures for core module tests."""

from unittest.mock import AsyncMock, Mock

import pytest


def create_mock_plugin(name="TestPlugin", **kwargs) -> Mock:
    """
    Factory function to create mock plugin objects.

    Args:
        name: Plugin name (default: "TestPlugin")
        **kwargs: Additional attributes to set on the plugin
            - commands: List of commands to set as COMMANDS attribute
            - handle_side_effect: Side effect for handle method
            - handle_return: Return value for handle method
            - Any other attributes will be set directly on the plugin
    """
    plugin = Mock()
    plugin.NAME = name

    if "commands" in kwargs:
        plugin.COMMANDS = kwargs.pop("commands")

    plugin.handle = (
        AsyncMock(side_effect=kwargs.pop("handle_side_effect"))
        if "handle_side_effect" in kwargs
        else AsyncMock(return_value=kwargs.pop("handle_return"))
        if "handle_return" in kwargs
        else AsyncMock()
    )

    for key, val in kwargs.items():
        setattr(plugin, key, val)

    return plugin


@pytest.fixture
def mock_plugin():
    """Create a mock plugin with name 'TestPlugin' that handles commands."""
    return create_mock_plugin(handle_return=True)


@pytest.fixture
def mock_plugin_with_setup():
    """Create a mock plugin with name 'TestPlugin' that has a setup method."""
    return create_mock_plugin(setup=Mock())


@pytest.fixture
def mock_plugin_no_handle():
    """Create a mock plugin that doesn't handle commands (returns None)."""
    return create_mock_plugin(handle_return=None)


@pytest.fixture
def mock_plugin_exit():
    """Create a mock plugin that signals exit (returns False)."""
    return create_mock_plugin(handle_return=False)


@pytest.fixture
def mock_plugin_with_error():
    """Create a mock plugin that raises an exception."""
    return create_mock_plugin(handle_side_effect=ValueError("Test error"))


@pytest.fixture
def mock_process():
    """Factory fixture for a finished playerctl subprocess."""

    def _create(stdout=b"", stderr=b"", returncode=0):
        proc = Mock()
        proc.returncode = returncode
        proc.communicate = AsyncMock(return_value=(stdout, stderr))
        return proc

    return _create
