"""
Configuration loader for litesearch.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

# Where console log records go; "none" leaves only the file handler
CONSOLE_STREAMS = ("stderr", "stdout", "none")


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    database_path: Path
    logs_directory: Optional[Path]


@dataclass
class StorageConfig:
    """
    SQLite tuning applied to every connection.

    The defaults trade durability for write throughput: the rollback
    journal lives in memory and the OS is never asked to sync, so a crash
    during or shortly after a write can lose data or corrupt the file.
    """
    journal_mode: str = "MEMORY"
    synchronous: str = "OFF"
    page_size: int = 4096
    timeout: float = 30.0


@dataclass
class IndexConfig:
    """Configuration for index table creation."""
    tokenizer: str = "unicode61"


@dataclass
class IndexingConfig:
    """Configuration for indexing behavior."""
    batch_size: int = 100
    log_progress_every: int = 100
    min_nested_string_length: int = 15


@dataclass
class SearchConfig:
    """Configuration for search functionality."""
    default_limit: int = 50
    facet_limit: int = 50


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int
    console: str = "stderr"


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    storage: StorageConfig
    index: IndexConfig
    indexing: IndexingConfig
    search: SearchConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        project_root = config_path.parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def defaults(cls, project_root: Path = None) -> "Config":
        """Build a Config with every built-in default value."""
        return cls._parse_config({}, project_root or Path.cwd())

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        logs_directory = paths_data.get("logs_directory")
        paths = PathsConfig(
            database_path=cls._resolve_path(paths_data.get("database_path", "output/index.db"), project_root),
            logs_directory=cls._resolve_path(logs_directory, project_root) if logs_directory else None
        )

        storage_data = data.get("storage", {})
        storage = StorageConfig(
            journal_mode=storage_data.get("journal_mode", "MEMORY"),
            synchronous=storage_data.get("synchronous", "OFF"),
            page_size=storage_data.get("page_size", 4096),
            timeout=storage_data.get("timeout", 30.0)
        )

        index_data = data.get("index", {})
        index = IndexConfig(
            tokenizer=index_data.get("tokenizer", "unicode61")
        )

        idx_data = data.get("indexing", {})
        indexing = IndexingConfig(
            batch_size=idx_data.get("batch_size", 100),
            log_progress_every=idx_data.get("log_progress_every", 100),
            min_nested_string_length=idx_data.get("min_nested_string_length", 15)
        )

        search_data = data.get("search", {})
        search = SearchConfig(
            default_limit=search_data.get("default_limit", 50),
            facet_limit=search_data.get("facet_limit", 50)
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5),
            console=log_data.get("console", "stderr")
        )

        if logging_cfg.console not in CONSOLE_STREAMS:
            raise ConfigurationError(
                f"Unsupported logging console: {logging_cfg.console}",
                {"allowed": list(CONSOLE_STREAMS)}
            )

        return cls(
            paths=paths,
            storage=storage,
            index=index,
            indexing=indexing,
            search=search,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, making relative paths absolute."""
        path = Path(path_str)
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory and falls
                    back to built-in defaults when nothing is found.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If an explicit config file cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()

        if config_path is None:
            _config_instance = Config.defaults()
        else:
            _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Optional[Path]:
    """Search upward from current directory to find config/config.json."""
    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
