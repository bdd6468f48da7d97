"""Pytest fixtures for plugin tests."""

from unittest.mock import AsyncMock, Mock

import pytest
from mediamenu.core.state import MenuState, PlayerRecord, ToolError


@pytest.fixture
def mock_core():
    """Create a mock core object for testing plugins."""
    core = Mock()
    core.run_tool = AsyncMock(return_value="")
    core.refresh = AsyncMock()
    core.state = MenuState(is_loading=False)
    core.settle_delay = 0.3
    core.toggle_settle_delay = 0.4
    return core


@pytest.fixture
def sample_players():
    """A: playing, B: paused, C: playing."""
    return (
        PlayerRecord("a.instance1", "Playing"),
        PlayerRecord("b.instance2", "Paused"),
        PlayerRecord("c.instance3", "Playing"),
    )


@pytest.fixture
def mock_core_with_players(mock_core, sample_players):
    """Create a mock core whose state already lists sample_players."""
    mock_core.state = mock_core.state.with_players(sample_players)
    return mock_core


@pytest.fixture
def playerctl_factory():
    """
    Factory fixture that fakes playerctl output per argument list.

    Args:
        responses: dict mapping an argument tuple to stdout text, or to an
            exception instance to raise. Unlisted commands succeed with "".
    """

    def _create(mock_core, responses):
        async def run_tool(args, ignore_error=False):
            result = responses.get(tuple(args), "")
            if isinstance(result, Exception):
                if ignore_error:
                    return ""
                raise result
            return result

        mock_core.run_tool = AsyncMock(side_effect=run_tool)
        return mock_core

    return _create


@pytest.fixture
def tool_error():
    return ToolError(["playerctl", "pause"], 1, "No players found")
