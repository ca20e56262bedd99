"""savesync - game save backup synchronization.

Keeps a game's save directory and a local backup directory in sync:
saves found on only one side are copied to the other, and a save can be
deleted from both sides on request.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "SaveSyncConfig",
    "ReconcileEngine",
    "TickResult",
    "ReconciliationState",
    "OriginOnly",
    "BackupOnly",
    "Synced",
    "SaveFilter",
    "scan_state",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "SaveSyncConfig":
        from savesync.config.schema import SaveSyncConfig

        return SaveSyncConfig
    if name in ("ReconcileEngine", "TickResult"):
        from savesync.sync import engine

        return getattr(engine, name)
    if name in ("ReconciliationState", "OriginOnly", "BackupOnly", "Synced"):
        from savesync.sync import records

        return getattr(records, name)
    if name in ("SaveFilter", "scan_state"):
        from savesync.sync import scanner

        return getattr(scanner, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
