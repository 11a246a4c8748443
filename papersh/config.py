"""Configuration management.

``Settings`` is a **metaclass-based singleton**: the first call to
``Settings.load()`` creates the instance; every later call returns
the same object.  Use ``update()`` to change values at runtime, or
``reload()`` to re-read everything from disk.

The configuration file is YAML, by default ``~/.config/papersh/config.yaml``,
with four sections::

    storage:
      state_path: ~/.local/share/papersh/state.yaml
      history_path: ~/.local/share/papersh/history
      file_dir: ~/.local/share/papersh/files
      note_dir: ~/.local/share/papersh/notes
    filter:
      case_insensitive: false
    display:
      table_columns: [title, first-author, venue, year]
    output:
      viewer_command: [zathura]
      viewer_batch: false
      editor_command: [vim, -p]
      editor_batch: true
      browser_command: [firefox]
    log_level: WARNING

On first run a file with the defaults is written.
"""

import logging
from dataclasses import MISSING, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from papersh.errors import ConfigError
from papersh.models.paper import COLUMNS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/papersh/config.yaml")
DEFAULT_DATA_DIR = Path("~/.local/share/papersh")


# ---------------------------------------------------------------------------
# Singleton metaclass
# ---------------------------------------------------------------------------

class _SettingsMeta(type):
    """Metaclass that enforces a process-wide singleton for *Settings*.

    * First ``Settings(...)`` creates and caches the instance.
    * Later ``Settings(...)`` calls return the cached instance (args ignored).
    """

    _instances: dict[type, Any] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


# ---------------------------------------------------------------------------
# Settings dataclass (singleton)
# ---------------------------------------------------------------------------

@dataclass
class Settings(metaclass=_SettingsMeta):
    """Application settings: a singleton with runtime-mutable values.

    Usage::

        settings = Settings.load()               # first call → create
        settings = Settings.load()               # later → same object
        settings.update(case_insensitive=True)   # runtime change
        settings = Settings.reload()             # re-read from disk
    """

    config_path: Path = DEFAULT_CONFIG_PATH

    # storage
    state_path: Path = DEFAULT_DATA_DIR / "state.yaml"
    history_path: Path = DEFAULT_DATA_DIR / "history"
    file_dir: Path = DEFAULT_DATA_DIR / "files"
    note_dir: Path = DEFAULT_DATA_DIR / "notes"

    # filter
    case_insensitive: bool = False

    # display
    table_columns: list[str] = field(
        default_factory=lambda: ["title", "first-author", "venue", "year"]
    )

    # output
    viewer_command: list[str] = field(default_factory=lambda: ["zathura"])
    viewer_batch: bool = False
    editor_command: list[str] = field(default_factory=lambda: ["vim", "-p"])
    editor_batch: bool = True
    browser_command: list[str] = field(default_factory=lambda: ["firefox"])

    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        for name in ("config_path", "state_path", "history_path", "file_dir", "note_dir"):
            setattr(self, name, Path(getattr(self, name)).expanduser())

    # ── Runtime helpers ───────────────────────────────────────────────

    def update(self, **kwargs: Any) -> None:
        """Mutate settings fields at runtime.

        >>> Settings.load().update(viewer_batch=True)
        """
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"Settings has no field '{key}'")
            setattr(self, key, value)
        self.validate()

    def validate(self) -> None:
        """Reject values that would only fail later, at render or spawn time.

        Raises:
            ConfigError: On an unknown table column or an empty command
        """
        unknown = [c for c in self.table_columns if c not in COLUMNS]
        if unknown:
            raise ConfigError(
                f"Unknown table column(s) {unknown}; choose from {list(COLUMNS)}"
            )
        if not self.table_columns:
            raise ConfigError("display.table_columns must not be empty")
        for name in ("viewer_command", "editor_command", "browser_command"):
            command = getattr(self, name)
            if not command or not all(isinstance(c, str) and c for c in command):
                raise ConfigError(f"output.{name} must be a non-empty list of strings")
        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL
        ):
            raise ConfigError(f"Invalid log_level: '{self.log_level}'")

    def ensure_dirs(self) -> None:
        """Create the storage directories if they are missing."""
        for directory in (self.state_path.parent, self.history_path.parent, self.file_dir, self.note_dir):
            directory.mkdir(parents=True, exist_ok=True)

    # ── Factory / lifecycle ───────────────────────────────────────────

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load or return the singleton Settings instance.

        On first call the singleton is created from *config_path*
        (default ``~/.config/papersh/config.yaml``); subsequent calls
        return the cached instance.

        Raises:
            ConfigError: The file cannot be parsed or fails validation
        """
        if cls in _SettingsMeta._instances:
            return _SettingsMeta._instances[cls]  # type: ignore[return-value]

        config_path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        if not config_path.exists():
            save_settings(config_path, _default_values())
            logger.info("Created default config at %s", config_path)

        values = _load_config_file(config_path)
        settings = cls(config_path=config_path, **values)
        try:
            settings.validate()
        except ConfigError:
            cls.reset()
            raise
        return settings

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> "Settings":
        """Discard the current singleton and re-load from disk."""
        cls.reset()
        return cls.load(config_path)

    @classmethod
    def reset(cls) -> None:
        """Discard the singleton so the next ``load()`` re-creates it."""
        _SettingsMeta._instances.pop(cls, None)


# ---------------------------------------------------------------------------
# YAML loader / saver
# ---------------------------------------------------------------------------

# (section, key) → Settings field
_LAYOUT: dict[tuple[Optional[str], str], str] = {
    ("storage", "state_path"): "state_path",
    ("storage", "history_path"): "history_path",
    ("storage", "file_dir"): "file_dir",
    ("storage", "note_dir"): "note_dir",
    ("filter", "case_insensitive"): "case_insensitive",
    ("display", "table_columns"): "table_columns",
    ("output", "viewer_command"): "viewer_command",
    ("output", "viewer_batch"): "viewer_batch",
    ("output", "editor_command"): "editor_command",
    ("output", "editor_batch"): "editor_batch",
    ("output", "browser_command"): "browser_command",
    (None, "log_level"): "log_level",
}


def _load_config_file(path: Path) -> dict[str, Any]:
    """Read ``config.yaml`` into Settings keyword arguments."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config '{path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config '{path}' must be a mapping")

    values: dict[str, Any] = {}
    for (section, key), name in _LAYOUT.items():
        container = data if section is None else data.get(section) or {}
        if not isinstance(container, dict):
            raise ConfigError(f"Config section '{section}' must be a mapping")
        if key in container:
            values[name] = container[key]

    for name in ("case_insensitive", "viewer_batch", "editor_batch"):
        if name in values and not isinstance(values[name], bool):
            raise ConfigError(f"'{name}' must be true or false")
    for name in ("table_columns", "viewer_command", "editor_command", "browser_command"):
        if name in values and not isinstance(values[name], list):
            raise ConfigError(f"'{name}' must be a list")
    if "log_level" in values and not isinstance(values["log_level"], str):
        raise ConfigError("'log_level' must be a level name such as INFO")
    return values


def _default_values() -> dict[str, Any]:
    """Field defaults of ``Settings`` without touching the singleton."""
    return {
        f.name: f.default if f.default is not MISSING else f.default_factory()  # type: ignore[misc]
        for f in fields(Settings)
    }


def save_settings(path: Path, values: dict[str, Any]) -> None:
    """Persist settings *values* (field name → value) to ``config.yaml``."""
    data: dict[str, Any] = {}
    for (section, key), name in _LAYOUT.items():
        value = values[name]
        if isinstance(value, Path):
            value = str(value)
        if section is None:
            data[key] = value
        else:
            data.setdefault(section, {})[key] = value

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# papersh configuration\n")
        f.write("# table_columns: title, nickname, authors, first-author, venue, year, labels, state\n")
        f.write("# commands may contain '{}' where the file list is substituted\n\n")
        yaml.dump(
            data,
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
