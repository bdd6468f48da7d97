#!/usr/bin/env python3
"""
MediaMenu Core - Media player control for Linux

Loads plugins from plugins/ folder automatically.
Talks to media players through playerctl.
"""

import asyncio
import importlib
import os
import sys
from pathlib import Path

from ..plugins.players import list_players
from .menu import build_menu, format_menu
from .state import MenuState, ToolError

# =============================================================================
# CONFIGURATION
# =============================================================================

PLAYERCTL = os.environ.get("MEDIAMENU_PLAYERCTL", "playerctl")
SETTLE_DELAY = 0.3  # Seconds to wait before re-reading player status
TOGGLE_SETTLE_DELAY = 0.4
PROMPT = "🎵 > "

PLUGIN_PACKAGE = f"{__package__.rsplit('.', 1)[0]}.plugins"

NOTICE_PREFIX = {
    "success": "✓",
    "failure": "✗",
    "animated": "…",
}

# =============================================================================
# CORE CLASS
# =============================================================================


class MediaMenu:
    def __init__(
        self,
        tool=PLAYERCTL,
        settle_delay=SETTLE_DELAY,
        toggle_settle_delay=TOGGLE_SETTLE_DELAY,
    ):
        self.plugins = []
        self.tool = tool
        self.settle_delay = settle_delay
        self.toggle_settle_delay = toggle_settle_delay
        self.state = MenuState()
        self.pending = set()
        self.input_buffer = b""

    # --- Utilities for plugins ---

    async def run_tool(self, args, ignore_error=False):
        """
        Run playerctl with args and return its stripped stdout.

        A missing executable or non-zero exit raises ToolError, or returns ""
        when ignore_error is set.
        """
        cmd = [self.tool, *args]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as e:
            if ignore_error:
                return ""
            raise ToolError(cmd, stderr=str(e)) from e

        if proc.returncode != 0:
            if ignore_error:
                return ""
            raise ToolError(
                cmd, proc.returncode, stderr.decode("utf-8", errors="replace").strip()
            )
        return stdout.decode("utf-8", errors="replace").strip()

    def notify(self, notice):
        """Show a notice in the terminal."""
        prefix = NOTICE_PREFIX.get(notice.style, "•")
        text = f"🎵 {prefix} {notice.title}"
        if notice.message:
            text += f" - {notice.message}"
        print(text)

    def render(self):
        print(
            format_menu(
                build_menu(self.state),
                is_loading=self.state.is_loading,
                query=self.state.query,
            )
        )

    async def read_line(self, prompt, fd=None):
        """
        Read one line from stdin through the event loop.

        Nothing blocks outside the loop, so Ctrl-C at the prompt exits
        straight away. Raises EOFError at end of input.
        """
        if fd is None:
            fd = sys.stdin.fileno()
        print(prompt, end="", flush=True)

        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def take_line():
            line, _, self.input_buffer = self.input_buffer.partition(b"\n")
            return line.decode("utf-8", errors="replace")

        def on_readable():
            chunk = os.read(fd, 4096)
            if chunk:
                self.input_buffer += chunk
                if b"\n" in self.input_buffer:
                    future.set_result(take_line())
            elif self.input_buffer:
                future.set_result(take_line())
            else:
                future.set_exception(EOFError())
            if future.done():
                loop.remove_reader(fd)

        if b"\n" in self.input_buffer:
            return take_line()

        try:
            loop.add_reader(fd, on_readable)
        except PermissionError:
            # Regular files can't be polled and never block
            while not future.done():
                on_readable()
            return future.result()

        try:
            return await future
        finally:
            loop.remove_reader(fd)

    # --- State ---

    async def refresh(self, silent=False):
        """Rebuild the player list. Never raises."""
        if not silent:
            self.state = self.state.loading()
        players = await list_players(self)
        self.state = self.state.with_players(players)
        return self.state

    def apply(self, outcome):
        """Record an Outcome: last action, notices, and the delayed refresh."""
        self.state = self.state.with_action(outcome.last_action)
        for notice in outcome.notices:
            self.notify(notice)
        if outcome.refresh_after is not None:
            self.schedule_refresh(outcome.refresh_after)
        return self.state

    def schedule_refresh(self, delay):
        async def refresh_later():
            await asyncio.sleep(delay)
            await self.refresh(silent=True)

        task = asyncio.get_running_loop().create_task(refresh_later())
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)
        return task

    async def settle(self):
        """Wait until every scheduled refresh has finished."""
        while self.pending:
            await asyncio.gather(*list(self.pending))

    # --- Plugin management ---

    def load_plugins(self):
        plugins_dir = Path(__file__).parent.parent / "plugins"
        if not plugins_dir.exists():
            print("No plugins directory found")
            return

        for file in sorted(plugins_dir.glob("*.py")):
            if file.name.startswith("_"):
                continue

            module_name = f"{PLUGIN_PACKAGE}.{file.stem}"
            try:
                module = importlib.import_module(module_name)

                if hasattr(module, "NAME") and hasattr(module, "handle"):
                    if hasattr(module, "setup"):
                        module.setup(self)

                    self.plugins.append(module)
                    print(f"  ✓ Loaded: {module.NAME}")
                else:
                    print(f"  ✗ Invalid plugin: {file.name} (missing NAME or handle)")
            except Exception as e:
                print(f"  ✗ Failed to load {file.name}: {e}")

    async def route_command(self, cmd):
        """Route command to appropriate plugin. Returns False to exit."""
        cmd = " ".join(cmd.split()).strip(".,! ")

        if not cmd:
            return True

        for plugin in self.plugins:
            try:
                result = await plugin.handle(cmd, self)
                if result is True:
                    return True
                elif result is False:
                    return False
            except Exception as e:
                print(f"Plugin error ({plugin.NAME}): {e}")

        print("I didn't understand. Type help for commands.")
        return True

    # --- Main loop ---

    async def main(self, argv=()):
        print("Loading plugins...")
        self.load_plugins()

        if not self.plugins:
            print("No plugins loaded. Exiting.")
            return 1

        await self.refresh()

        if argv:
            await self.route_command(" ".join(argv))
            await self.settle()
            self.render()
            return 0

        print("""
╔══════════════════════════════════════════╗
║            MediaMenu                     ║
╠══════════════════════════════════════════╣
║  Type a command or a player number       ║
║  Type "help" for available commands      ║
╚══════════════════════════════════════════╝
""")

        while True:
            self.render()
            try:
                cmd = await self.read_line(PROMPT)
            except EOFError:
                break
            if not await self.route_command(cmd):
                break
            await self.settle()

        print("\nBye!")
        return 0



def run(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    app = MediaMenu()
    try:
        return asyncio.run(app.main(argv))
    except KeyboardInterrupt:
        print("\nBye!")
        return 0


if __name__ == "__main__":
    sys.exit(run())
