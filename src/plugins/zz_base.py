"""
Base Plugin - Help and Exit
"""

NAME = "base"
DESCRIPTION = "Help and exit commands"

COMMANDS = [
    "help - list all commands",
    "quit/exit/q - exit MediaMenu",
]

core = None


def setup(c):
    global core
    core = c


async def handle(cmd, core):
    cmd_lower = cmd.lower().strip()

    if cmd_lower in ["quit", "exit", "q", "bye", "goodbye"]:
        print("Goodbye.")
        return False  # Signal to exit

    if cmd_lower in ["help", "h", "?", "commands"]:
        show_help(core)
        return True

    return None  # Not handled


def show_help(core):
    print("\n=== Available Commands ===")
    for plugin in core.plugins:
        if hasattr(plugin, "COMMANDS"):
            print(f"\n{plugin.NAME}:")
            for cmd in plugin.COMMANDS:
                print(f"  • {cmd}")
    print()
