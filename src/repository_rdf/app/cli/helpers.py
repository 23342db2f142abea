"""
Shared plumbing for the CLI commands: configuration, logging and the
summary printed after a load.

stdout carries serialized RDF, so everything meant for people goes to
stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ...constants import CLIDefaults, LoggingConfig

# Handlers attached to the root logger by setup_logging()
_installed: List[logging.Handler] = []


def _jsonable(value: Any) -> bool:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return False
    return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; fields passed through `extra=` are kept."""

    _STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        for key, value in vars(record).items():
            if key in self._STANDARD_ATTRS or key.startswith("_"):
                continue
            payload.setdefault(key, value if _jsonable(value) else str(value))
        return json.dumps(payload, ensure_ascii=False)


def get_default_config_path() -> str:
    """config.json in the working directory."""
    return str(Path.cwd() / CLIDefaults.CONFIG_FILE_NAME)


def reset_logging() -> None:
    """Detach the handlers installed by setup_logging()."""
    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    *,
    config: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """
    Configure the root logger for one CLI run.

    Calling it again replaces the previous handlers instead of stacking them.

    Args:
        level: Overrides the configured level.
        log_file: Overrides the configured log file.
        config: The 'logging' section of the configuration
            (level, file, format: text|json, and rotation: enabled,
            max_mb, backup_count).

    Returns:
        The log file in use, or None when logging to stderr only.
    """
    options = dict(config or {})
    level_name = str(level or options.get("level") or LoggingConfig.DEFAULT_LOG_LEVEL).upper()
    file_path = log_file or options.get("file")

    formatter: logging.Formatter
    if options.get("format") == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(LoggingConfig.LOG_FORMAT, LoggingConfig.DATE_FORMAT)

    reset_logging()
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if file_path:
        rotation = options.get("rotation") if isinstance(options.get("rotation"), dict) else {}
        try:
            Path(file_path).parent.mkdir(parents=True, exist_ok=True)
            if rotation.get("enabled", True):
                handlers.append(RotatingFileHandler(
                    file_path,
                    maxBytes=int(rotation.get("max_mb", LoggingConfig.MAX_LOG_FILE_MB)) * 1024 * 1024,
                    backupCount=int(rotation.get("backup_count", LoggingConfig.LOG_BACKUP_COUNT)),
                    encoding="utf-8",
                ))
            else:
                handlers.append(logging.FileHandler(file_path, encoding="utf-8"))
        except OSError as e:
            print(f"Warning: cannot write log file {file_path} ({e}); logging to stderr only", file=sys.stderr)
            file_path = None

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)

    if file_path:
        logging.getLogger(__name__).info(f"Logging to: {file_path}")
    return file_path


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Read and validate a JSON configuration file.

    Recognized keys:
        base_uri: Base URI for external node identifiers.
        namespaces: Prefix -> URI hints used when registering namespaces.
        workspaces: Workspace names to create in the in-memory repository.
        logging: Options passed to setup_logging().

    Raises:
        FileNotFoundError: If the file does not exist.
        PermissionError: If the path is a symlink.
        ValueError: If the path is not a .json file, the JSON is invalid,
            or a recognized key has the wrong shape.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    path = Path(config_path)
    if path.suffix.lower() != '.json':
        raise ValueError(f"Configuration file must be a .json file: {config_path}")
    if path.is_symlink():
        raise PermissionError(f"Symlinks are not allowed for configuration files: {config_path}")
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        config = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")
    if not isinstance(config.get('base_uri', ''), str):
        raise ValueError("'base_uri' must be a string")
    if not isinstance(config.get('logging', {}), dict):
        raise ValueError("'logging' must be an object")

    namespaces = config.get('namespaces', {})
    if not isinstance(namespaces, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in namespaces.items()
    ):
        raise ValueError("'namespaces' must be an object mapping prefixes to namespace URIs")

    workspaces = config.get('workspaces', [])
    if not isinstance(workspaces, list) or not all(isinstance(w, str) and w for w in workspaces):
        raise ValueError("'workspaces' must be a list of workspace names")

    return config


def print_summary(title: str, counts: Mapping[str, int], width: int = 60) -> None:
    """Print a boxed count summary to stderr, largest count first."""
    rule = "=" * width
    lines = [rule, title, rule]
    lines.extend(f"  {name}: {count}" for name, count in sorted(counts.items(), key=lambda item: -item[1]))
    print("\n".join(lines), file=sys.stderr)
