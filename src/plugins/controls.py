"""
Controls Plugin - Playback controls via playerctl
"""

import asyncio

from ..core.state import Notice, Outcome, ToolError
from .players import find_player

NAME = "controls"
DESCRIPTION = "Playback controls"

COMMANDS = [
    "toggle [player] - play/pause a player (or just type its number)",
    "play [player] - resume a player",
    "pause [player] - pause a player",
    "pause all - pause every playing player",
    "pause all except [player] / solo [player] - pause the other players",
    "next/skip - next track",
    "previous/back - previous track",
]

core = None


def setup(c):
    global core
    core = c


async def player_command(command, core, identifier=None):
    args = [command, "-p", identifier] if identifier else [command]
    await core.run_tool(args)


async def _control(command, verb, player, core, delay):
    action = f"{command} for {player.identifier}"
    try:
        await player_command(command, core, player.identifier)
    except ToolError:
        notice = Notice("failure", f"Failed to {verb} {player.display_name}")
        return Outcome(action, (notice,))
    return Outcome(action, refresh_after=delay)


async def toggle(player, core):
    delay = core.toggle_settle_delay
    return await _control("play-pause", "toggle", player, core, delay)


async def play(player, core):
    return await _control("play", "play", player, core, core.settle_delay)


async def pause(player, core):
    return await _control("pause", "pause", player, core, core.settle_delay)


async def _skip(command, description, players, core):
    # Scoped to the first playing player, otherwise playerctl picks one
    active = next((p for p in players if p.is_playing), None)
    if active:
        action = f"{command} for {active.identifier}"
        failure = f"Failed to go to {description} on {active.display_name}"
    else:
        action = f"{command} (global)"
        failure = f"Failed to go to {description}"

    try:
        await player_command(command, core, active.identifier if active else None)
    except ToolError:
        return Outcome(action, (Notice("failure", failure),))
    return Outcome(action, refresh_after=core.settle_delay)


async def next_track(players, core):
    return await _skip("next", "next track", players, core)


async def previous_track(players, core):
    return await _skip("previous", "previous track", players, core)


async def pause_each(targets, core):
    """Pause every target concurrently. Returns the players that failed."""
    results = await asyncio.gather(
        *(player_command("pause", core, p.identifier) for p in targets),
        return_exceptions=True,
    )
    return [p for p, result in zip(targets, results) if isinstance(result, Exception)]


def _names(targets, failed):
    return ", ".join(p.display_name for p in targets if p not in failed)


def _plural(count):
    return "" if count == 1 else "s"


async def pause_all(players, core):
    targets = [p for p in players if p.is_playing]
    failed = await pause_each(targets, core)

    notices = [Notice("failure", f"Failed to pause {p.display_name}") for p in failed]
    paused = len(targets) - len(failed)
    if not failed:
        notices.append(Notice("success", "Paused all players"))
    elif paused:
        notices.append(
            Notice(
                "success",
                f"Paused {paused} of {len(targets)} players",
                _names(targets, failed),
            )
        )
    return Outcome(f"pause all ({len(targets)})", tuple(notices), core.settle_delay)


async def pause_all_except(identifier, players, core):
    targets = [p for p in players if p.identifier != identifier and p.is_playing]
    failed = await pause_each(targets, core)

    notices = [Notice("failure", f"Failed to pause {p.display_name}") for p in failed]
    paused = len(targets) - len(failed)
    if not failed:
        notices.append(
            Notice("success", f"Paused {paused} other player{_plural(paused)}")
        )
    elif paused:
        notices.append(
            Notice(
                "success",
                f"Paused {paused} of {len(targets)} other players",
                _names(targets, failed),
            )
        )
    return Outcome(
        f"pause all except {identifier} ({len(targets)})",
        tuple(notices),
        core.settle_delay,
    )


def resolve_target(text, core):
    """Player named by text, or the only player when text is empty."""
    text = text.strip()
    players = core.state.players
    if not text and len(players) == 1:
        return players[0]

    player = find_player(players, text)
    if player is None:
        if text:
            core.notify(Notice("failure", f"No player matching {text}"))
        else:
            core.notify(
                Notice("failure", "Which player?", "Add a player name or number")
            )
    return player


async def handle(cmd, core):
    lowered = cmd.lower()
    verb, _, rest = cmd.partition(" ")
    verb = verb.lower()
    players = core.state.players

    for prefix in ["pause all except ", "pause others ", "solo "]:
        if lowered.startswith(prefix):
            player = resolve_target(cmd[len(prefix):], core)
            if player:
                core.apply(await pause_all_except(player.identifier, players, core))
            return True

    if lowered in ["pause all", "pause everything"]:
        core.apply(await pause_all(players, core))
        return True

    if cmd.isdigit():
        verb, rest = "toggle", cmd

    if lowered == "play pause" or lowered.startswith("play pause "):
        verb, rest = "toggle", cmd[len("play pause"):]

    single = {"toggle": toggle, "play-pause": toggle, "play": play, "pause": pause}
    if verb in single:
        player = resolve_target(rest, core)
        if player:
            core.apply(await single[verb](player, core))
        return True

    if verb in ["next", "skip"]:
        core.apply(await next_track(players, core))
        return True

    if verb in ["previous", "prev", "back"]:
        core.apply(await previous_track(players, core))
        return True

    return None  # Not handled
