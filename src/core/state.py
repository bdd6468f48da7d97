"""
Menu state - immutable snapshots passed between the core and plugins
"""

from dataclasses import dataclass, field, replace

KNOWN_STATUSES = ("Playing", "Paused", "Stopped")
UNKNOWN_STATUS = "Unknown"


def normalize_status(text):
    text = (text or "").strip()
    return text if text in KNOWN_STATUSES else UNKNOWN_STATUS


@dataclass(frozen=True)
class PlayerRecord:
    """One player reported by playerctl at refresh time."""

    identifier: str
    status: str = UNKNOWN_STATUS

    @property
    def display_name(self):
        return self.identifier.split(".")[0]

    @property
    def is_playing(self):
        return self.status == "Playing"

    @property
    def label(self):
        if self.is_playing:
            return f"{self.display_name} (Playing)"
        return self.display_name


@dataclass(frozen=True)
class MenuState:
    players: tuple = ()
    is_loading: bool = True
    last_action: str = ""
    query: str = ""

    def loading(self):
        return replace(self, is_loading=True)

    def with_players(self, players):
        return replace(self, players=tuple(players), is_loading=False)

    def with_action(self, text):
        return replace(self, last_action=text)

    def with_query(self, text):
        return replace(self, query=text.strip())


@dataclass(frozen=True)
class Notice:
    style: str  # success, failure or animated
    title: str
    message: str = ""


@dataclass(frozen=True)
class Outcome:
    """
    Result of one control operation.

    refresh_after is the settle delay in seconds before the player list is
    rebuilt, or None when no refresh should follow.
    """

    last_action: str
    notices: tuple = field(default_factory=tuple)
    refresh_after: float | None = None


class ToolError(Exception):
    """A playerctl invocation could not be run or exited non-zero."""

    def __init__(self, args, returncode=None, stderr=""):
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or f"exit code {returncode}"
        super().__init__(f"{' '.join(self.args_list)}: {detail}")
