"""
Configuration loader for sshpick.
Handles locating, loading and saving the YAML file that holds the target list.
"""

import logging
import os
import tempfile
from collections.abc import Sequence
from typing import Protocol

import yaml
from pydantic import ValidationError

from .errors import LoadError, SaveError
from .models import AppConfig, TargetRecord, ThemeColors

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SSHPICK_CONFIG"
CONFIG_DIR_NAME = "sshpick"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_LOG_FILE = os.path.join(tempfile.gettempdir(), "sshpick.log")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONFIG_DIR_MODE = 0o750
CONFIG_FILE_MODE = 0o640


def get_config_path(explicit_path: str | None = None) -> str:
    """
    Resolve the config file location.

    Args:
        explicit_path: Path given on the command line, if any.

    Returns:
        The first of: the explicit path, $SSHPICK_CONFIG,
        $XDG_CONFIG_HOME/sshpick/config.yaml, ~/.config/sshpick/config.yaml.
    """
    if explicit_path:
        return os.path.expanduser(explicit_path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return os.path.expanduser(env_path)
    config_home = os.getenv("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(config_home, CONFIG_DIR_NAME, CONFIG_FILE_NAME)


def configure_logging(log_file: str | None = None, debug: bool = False) -> str:
    """Send log records to a file; the terminal belongs to the TUI."""
    log_path = log_file or DEFAULT_LOG_FILE
    logging.basicConfig(
        filename=log_path,
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )
    logger.debug(f"Logging to {log_path}")
    return log_path


class ConfigStore(Protocol):
    """Durable storage for the target list."""

    def load(self) -> list[TargetRecord]: ...

    def save(self, targets: Sequence[TargetRecord]) -> None: ...


def parse_config(content: str, source: str = "<string>") -> AppConfig:
    """Parse YAML text into an AppConfig, raising LoadError on bad content."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise LoadError(f"failed to parse config file {source}: {e}") from e

    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise LoadError(f"failed to parse config file {source}: expected a mapping at top level")

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise LoadError(f"invalid config file {source}: {e}") from e


def dump_config(config: AppConfig) -> str:
    """Render an AppConfig as YAML, with port 22 and empty nicknames elided."""
    return yaml.safe_dump(config.to_storage(), sort_keys=False, allow_unicode=True)


class YamlConfigStore:
    """ConfigStore backed by a YAML file on disk."""

    def __init__(self, path: str):
        self.path = path
        self.theme: ThemeColors | None = None

    def load(self) -> list[TargetRecord]:
        try:
            with open(self.path, encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            logger.info(f"No config file at {self.path}, starting with an empty list")
            return []
        except OSError as e:
            raise LoadError(f"failed to read config file {self.path}: {e}") from e

        config = parse_config(content, self.path)
        self.theme = config.theme
        logger.info(f"Loaded {len(config.targets)} targets from {self.path}")
        return list(config.targets)

    def save(self, targets: Sequence[TargetRecord]) -> None:
        config = AppConfig(targets=list(targets), theme=self.theme)
        try:
            content = dump_config(config)
        except yaml.YAMLError as e:
            raise SaveError(f"failed to serialize config: {e}") from e

        config_dir = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(config_dir, mode=CONFIG_DIR_MODE, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".config-", suffix=".yaml.tmp", dir=config_dir)
        except OSError as e:
            raise SaveError(f"failed to write config file {self.path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, CONFIG_FILE_MODE)
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.warning(f"Could not remove temporary file {tmp_path}")
            raise SaveError(f"failed to write config file {self.path}: {e}") from e

        logger.info(f"Saved {len(config.targets)} targets to {self.path}")


class InMemoryConfigStore:
    """ConfigStore kept in memory, with switchable failures for tests."""

    def __init__(
        self,
        targets: Sequence[TargetRecord] | None = None,
        load_error: LoadError | None = None,
    ):
        self.targets: list[TargetRecord] = list(targets or [])
        self.load_error = load_error
        self.save_error: SaveError | None = None
        self.save_count = 0

    def load(self) -> list[TargetRecord]:
        if self.load_error is not None:
            raise self.load_error
        return list(self.targets)

    def save(self, targets: Sequence[TargetRecord]) -> None:
        self.save_count += 1
        if self.save_error is not None:
            raise self.save_error
        self.targets = list(targets)
