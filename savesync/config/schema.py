# savesync Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from savesync.sync.scanner import SaveFilter
from savesync.utils.paths import expand_path


class DirectoriesConfig(BaseModel):
    """The directory pair kept in sync."""

    model_config = ConfigDict(validate_default=True)

    save_dir: str = Field(
        default="~/Library/Application Support/Brogue/Brogue CE",
        description="Live game save directory",
    )
    backup_dir: str = Field(default="~/.brogue", description="Local backup directory")

    @field_validator("save_dir", "backup_dir")
    @classmethod
    def expand_paths(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return str(expand_path(v))


class FilterConfig(BaseModel):
    """Which files count as save files."""

    prefix: str = Field(default="Saved", description="Required file name prefix")
    extension: str = Field(default="broguesave", description="Required file extension (without dot)")

    @field_validator("prefix", "extension")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Reject empty filter values."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("extension")
    @classmethod
    def strip_dot(cls, v: str) -> str:
        """Accept '.broguesave' as well as 'broguesave'."""
        stripped = v.lstrip(".")
        if not stripped:
            raise ValueError("must not be empty")
        return stripped

    def to_filter(self) -> SaveFilter:
        return SaveFilter(prefix=self.prefix, extension=self.extension)


class LoopConfig(BaseModel):
    """Host loop timing and failure policy."""

    tick_interval_ms: int = Field(default=250, gt=0, description="Milliseconds between reconcile ticks")
    stop_on_copy_error: bool = Field(default=True, description="Stop the watch loop when a copy fails")

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    model_config = ConfigDict(validate_default=True)

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default="~/.config/savesync/savesync.log", description="Path to log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ and environment variables in optional paths."""
        if v is None:
            return None
        return str(expand_path(v))


class SaveSyncConfig(BaseModel):
    """Root configuration model for savesync."""

    directories: DirectoriesConfig = Field(default_factory=DirectoriesConfig, description="Directory pair")
    filter: FilterConfig = Field(default_factory=FilterConfig, description="Save file filter")
    loop: LoopConfig = Field(default_factory=LoopConfig, description="Host loop settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @property
    def save_dir(self) -> Path:
        return Path(self.directories.save_dir)

    @property
    def backup_dir(self) -> Path:
        return Path(self.directories.backup_dir)

    def get_filter(self) -> SaveFilter:
        """Save file predicate for this configuration."""
        return self.filter.to_filter()
