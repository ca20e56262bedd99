# savesync Output Module
# Rich console output for state and tick results

from savesync.output.console import Console, create_console, record_line, render_view, state_table

__all__ = [
    "Console",
    "create_console",
    "record_line",
    "render_view",
    "state_table",
]
