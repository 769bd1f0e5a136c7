"""
Configuration resolution for the keplog CLI.

Configuration is looked up, in order, in:

1. the nearest ``.keplog.json`` found by walking up from the working directory
2. the global ``~/.keplogrc`` file
3. ``KEPLOG_*`` environment variables

The first file found is used in full; the two files are never merged.
Environment variables only fill fields the file left empty. Nothing is cached:
every call re-reads the files.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

from keplog.constants import (
    DEFAULT_API_URL,
    ENV_API_KEY,
    ENV_API_URL,
    ENV_PROJECT_ID,
    GLOBAL_CONFIG_FILENAME,
    LOCAL_CONFIG_FILENAME,
)
from keplog.logging import get_logger
from keplog.utils.console import warning

logger = get_logger("keplog.utils.config_store")

# JSON key <-> attribute name
_FIELDS = (
    ("projectId", "project_id"),
    ("apiKey", "api_key"),
    ("apiUrl", "api_url"),
    ("projectName", "project_name"),
)


@dataclass
class KeplogConfig:
    """Project credentials and API location"""

    project_id: Optional[str] = None
    api_key: Optional[str] = None
    api_url: Optional[str] = None
    project_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "KeplogConfig":
        """Build a config from the camelCase JSON object stored on disk"""
        values = {}
        for json_key, attr in _FIELDS:
            value = data.get(json_key)
            if isinstance(value, str):
                values[attr] = value
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                values[attr] = str(value)
            elif value is not None:
                logger.debug(f"Ignoring non-text config value for {json_key}")
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        """Serialize to the on-disk shape, leaving out unset fields"""
        return {
            json_key: getattr(self, attr)
            for json_key, attr in _FIELDS
            if getattr(self, attr) is not None
        }


@dataclass
class Environment:
    """Process context the resolver reads from"""

    variables: Mapping[str, str] = field(default_factory=dict)
    cwd: Path = field(default_factory=Path.cwd)
    home: Path = field(default_factory=Path.home)

    @classmethod
    def from_os(cls) -> "Environment":
        return cls(variables=dict(os.environ), cwd=Path.cwd(), home=Path.home())

    def get(self, name: str) -> Optional[str]:
        """Return the variable's value, treating empty strings as unset"""
        return self.variables.get(name) or None


class ConfigStore:
    """Locates, reads and writes keplog configuration files"""

    def __init__(self, environment: Optional[Environment] = None):
        self._environment = environment

    @property
    def environment(self) -> Environment:
        # Without an explicit environment, snapshot the process on every access
        return self._environment or Environment.from_os()

    @property
    def global_config_path(self) -> Path:
        return self.environment.home / GLOBAL_CONFIG_FILENAME

    def find_local_config_file(
        self, start_directory: Optional[Union[str, Path]] = None
    ) -> Optional[Path]:
        """
        Walk up from start_directory looking for a local config file.

        Args:
            start_directory: Directory to start from, defaults to the cwd

        Returns:
            Path of the nearest config file, or None once the root is passed
        """
        current = Path(start_directory or self.environment.cwd).absolute()

        while True:
            candidate = current / LOCAL_CONFIG_FILENAME
            try:
                if candidate.is_file():
                    return candidate
            except OSError as e:
                # Unreadable directory, keep climbing
                logger.debug(f"Skipping {current}: {e}")

            parent = current.parent
            if parent == current:
                return None
            current = parent

    def _load_file(self, path: Path) -> Optional[KeplogConfig]:
        """Parse a config file, returning None when its content is malformed"""
        with open(path, "rb") as f:
            raw = f.read()

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Malformed config file {path}: {e}")
            warning(f"Warning: Failed to read config from {path}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Config file {path} does not contain a JSON object")
            warning(f"Warning: Failed to read config from {path}")
            return None

        return KeplogConfig.from_dict(data)

    def _read_with_source(self) -> Tuple[KeplogConfig, Optional[str]]:
        local_path = self.find_local_config_file()
        if local_path:
            config = self._load_file(local_path)
            if config is not None:
                logger.debug(f"Using local config {local_path}")
                return config, "local"

        global_path = self.global_config_path
        if global_path.is_file():
            config = self._load_file(global_path)
            if config is not None:
                logger.debug(f"Using global config {global_path}")
                return config, "global"

        return KeplogConfig(), None

    def read_config(self) -> KeplogConfig:
        """Read the local config file, else the global one, else nothing"""
        config, _ = self._read_with_source()
        return config

    def get_config(self) -> KeplogConfig:
        """Effective configuration: file values, then environment, then defaults"""
        file_config = self.read_config()
        env = self.environment

        return KeplogConfig(
            project_id=file_config.project_id or env.get(ENV_PROJECT_ID),
            api_key=file_config.api_key or env.get(ENV_API_KEY),
            api_url=file_config.api_url or env.get(ENV_API_URL) or DEFAULT_API_URL,
            project_name=file_config.project_name or None,
        )

    def get_config_source(self) -> str:
        """Name the source the file fields come from: local, global or environment"""
        _, source = self._read_with_source()
        return source or "environment"

    def _write(self, path: Path, config: Union[KeplogConfig, Mapping]) -> Path:
        if not isinstance(config, KeplogConfig):
            config = KeplogConfig.from_dict(config)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
            f.write("\n")

        logger.info(f"Configuration written to {path}")
        return path

    def write_local_config(
        self,
        config: Union[KeplogConfig, Mapping],
        directory: Optional[Union[str, Path]] = None,
    ) -> Path:
        """Write config to .keplog.json in directory (default: cwd), replacing it"""
        target_dir = Path(directory or self.environment.cwd)
        return self._write(target_dir / LOCAL_CONFIG_FILENAME, config)

    def write_global_config(self, config: Union[KeplogConfig, Mapping]) -> Path:
        """Write config to ~/.keplogrc, replacing it"""
        return self._write(self.global_config_path, config)

    def has_local_config(self) -> bool:
        return self.find_local_config_file() is not None

    def has_global_config(self) -> bool:
        return self.global_config_path.is_file()

    def get_local_config_path(self) -> Optional[Path]:
        return self.find_local_config_file()

    def get_global_config_path(self) -> Path:
        return self.global_config_path

    def delete_local_config(self, directory: Optional[Union[str, Path]] = None) -> None:
        """Remove .keplog.json from directory; missing files are ignored"""
        target = Path(directory or self.environment.cwd) / LOCAL_CONFIG_FILENAME
        target.unlink(missing_ok=True)

    def delete_global_config(self) -> None:
        """Remove ~/.keplogrc; a missing file is ignored"""
        self.global_config_path.unlink(missing_ok=True)
