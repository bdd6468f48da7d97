"""
Players Plugin - Discover media players through playerctl
"""

import asyncio

from ..core.state import UNKNOWN_STATUS, Notice, PlayerRecord, normalize_status

NAME = "players"
DESCRIPTION = "List, search and refresh media players"

COMMANDS = [
    "list - show media players",
    "refresh - reload media players",
    "search [text] - filter the menu (search alone clears it)",
    "test - check that playerctl works",
]

core = None


def setup(c):
    global core
    core = c


def parse_player_names(output):
    """Player names from `playerctl --list-all` output, sorted."""
    return sorted(line.strip() for line in output.splitlines() if line.strip())


async def get_status(name, core):
    status = await core.run_tool(["status", "-p", name], ignore_error=True)
    return normalize_status(status)


async def list_players(core):
    """
    Build a fresh, sorted tuple of PlayerRecords.

    Never raises: no playerctl, no players or a broken listing all give an
    empty tuple, and a player whose status can't be read is Unknown. A
    broken listing also leaves one failure notice on the core.
    """
    try:
        output = await core.run_tool(["--list-all"], ignore_error=True)
        names = parse_player_names(output)
        if not names:
            return ()

        statuses = await asyncio.gather(
            *(get_status(name, core) for name in names), return_exceptions=True
        )
    except Exception:
        core.notify(
            Notice(
                "failure",
                "Failed to get players",
                "Make sure playerctl is installed and media is playing",
            )
        )
        return ()

    return tuple(
        PlayerRecord(
            name, UNKNOWN_STATUS if isinstance(status, BaseException) else status
        )
        for name, status in zip(names, statuses)
    )


def find_player(players, text):
    """Find a player by list number, identifier or name prefix."""
    text = text.strip()
    if not text:
        return None

    if text.isdigit():
        index = int(text) - 1
        return players[index] if 0 <= index < len(players) else None

    for player in players:
        if player.identifier == text:
            return player

    lowered = text.lower()
    for player in players:
        if player.identifier.lower() == lowered:
            return player
    for player in players:
        if player.display_name.lower().startswith(lowered):
            return player
    for player in players:
        if player.identifier.lower().startswith(lowered):
            return player
    return None


async def check_playerctl(core):
    core.notify(Notice("animated", "Testing playerctl..."))
    try:
        version = await core.run_tool(["--version"])
    except Exception:
        core.notify(
            Notice(
                "failure",
                "playerctl not found",
                "Install with: sudo apt install playerctl",
            )
        )
        return False

    core.notify(Notice("success", f"playerctl: {version}"))
    return True


async def handle(cmd, core):
    verb, _, rest = cmd.partition(" ")
    verb = verb.lower()

    if verb in ["list", "ls", "players"]:
        return True

    if verb in ["refresh", "reload"]:
        await core.refresh()
        return True

    if verb in ["search", "find", "filter"]:
        core.state = core.state.with_query(rest)
        return True

    if verb in ["test", "version"]:
        await check_playerctl(core)
        return True

    return None  # Not handled
