"""
Menu rendering - turns a MenuState into sections, items and actions

Every action carries the text command that performs it, so whatever
displays the menu only has to pass that text back to route_command.
"""

from dataclasses import dataclass, field

STATUS_ICONS = {
    "Playing": "▶",
    "Paused": "⏸",
    "Stopped": "⏹",
}
DEFAULT_ICON = "🔈"

STATUS_EMOJI = {
    "Playing": "▶️",
    "Paused": "⏸️",
    "Stopped": "⏹️",
}
UNKNOWN_EMOJI = "❓"

ICON_NEXT = "⏭"
ICON_PREVIOUS = "⏮"
ICON_MUTED = "🔇"
ICON_REFRESH = "🔄"
ICON_TERMINAL = "💻"
ICON_INFO = "ℹ"


@dataclass(frozen=True)
class Action:
    title: str
    icon: str
    command: str


@dataclass(frozen=True)
class ActionSection:
    title: str
    actions: tuple


@dataclass(frozen=True)
class MenuItem:
    title: str
    icon: str
    accessories: tuple = ()
    subtitle: str = ""
    actions: tuple = ()
    position: int | None = None  # 1-based index into the player list


@dataclass(frozen=True)
class Section:
    title: str
    items: tuple = field(default_factory=tuple)


def player_icon(status):
    return STATUS_ICONS.get(status, DEFAULT_ICON)


def status_emoji(status):
    return STATUS_EMOJI.get(status, UNKNOWN_EMOJI)


def _refresh_action(title="Refresh Players"):
    return Action(title, ICON_REFRESH, "refresh")


def _test_action():
    return Action("Test playerctl", ICON_TERMINAL, "test playerctl")


def _global_actions():
    return (
        Action("Next Track", ICON_NEXT, "next"),
        Action("Previous Track", ICON_PREVIOUS, "previous"),
        Action("Pause All Players", ICON_MUTED, "pause all"),
    )


def player_item(player, position):
    name = player.identifier
    controls = ActionSection(
        "Player Controls",
        (
            Action("Toggle Play/Pause", STATUS_ICONS["Playing"], f"toggle {name}"),
            Action("Play", STATUS_ICONS["Playing"], f"play {name}"),
            Action("Pause", STATUS_ICONS["Paused"], f"pause {name}"),
            Action("Pause All Except This", ICON_MUTED, f"pause all except {name}"),
        ),
    )
    return MenuItem(
        title=player.label,
        icon=player_icon(player.status),
        accessories=(status_emoji(player.status), player.status),
        actions=(
            controls,
            ActionSection("Global Controls", _global_actions()),
            ActionSection("", (_refresh_action(), _test_action())),
        ),
        position=position,
    )


def _matches(item, query):
    return not query or query.lower() in item.title.lower()


def build_menu(state, query=None):
    """
    Build the menu for a state.

    Args:
        state: MenuState to render
        query: search text; defaults to state.query. Items whose title
            does not contain it (case-insensitive) are left out and empty
            sections are dropped.
    """
    if query is None:
        query = state.query

    players = [
        player_item(player, position)
        for position, player in enumerate(state.players, start=1)
    ]
    if not state.players and not state.is_loading:
        players.append(
            MenuItem(
                title="No media players found",
                icon=ICON_MUTED,
                accessories=("Start playing media to see players",),
                actions=(
                    ActionSection("", (_refresh_action("Refresh"), _test_action())),
                ),
            )
        )

    global_items = [
        MenuItem(
            title=action.title,
            icon=action.icon,
            actions=(ActionSection("", (action, _refresh_action())),),
        )
        for action in (
            Action("Pause All Players", ICON_MUTED, "pause all"),
            Action("Next Track", ICON_NEXT, "next"),
            Action("Previous Track", ICON_PREVIOUS, "previous"),
        )
    ]

    sections = [
        Section("Media Players", tuple(players)),
        Section("Global Controls", tuple(global_items)),
    ]
    if state.last_action:
        sections.append(
            Section(
                "Debug",
                (MenuItem("Last Action", ICON_INFO, subtitle=state.last_action),),
            )
        )

    filtered = []
    for section in sections:
        items = tuple(item for item in section.items if _matches(item, query))
        if items:
            filtered.append(Section(section.title, items))
    return filtered


def format_item(item):
    marker = f"{item.position}." if item.position is not None else "•"
    line = f"  {marker} {item.icon} {item.title}"
    if item.subtitle:
        line += f": {item.subtitle}"
    if item.accessories:
        line = f"{line:<40} {'  '.join(item.accessories)}"
    return line.rstrip()


def format_menu(sections, is_loading=False, query=""):
    """Render sections as terminal text."""
    lines = []
    if is_loading:
        lines.append("Loading...")
    if query:
        lines.append(f"🔍 {query}")
    for section in sections:
        lines.append(f"\n{section.title}")
        lines.extend(format_item(item) for item in section.items)
    if not sections and query:
        lines.append("  No matches")
    return "\n".join(lines)
