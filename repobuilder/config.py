#!/usr/bin/env python3

import os
import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("repobuilder")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. REPOBUILDER_CONFIG environment variable
    2. ~/.repobuilder/ directory
    """
    if 'REPOBUILDER_CONFIG' in os.environ:
        path = Path(os.environ['REPOBUILDER_CONFIG'])
        if path.exists():
            return path

    config_dir = Path.home() / '.repobuilder'
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return config_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "build": {
            "descriptor": "PKGBUILD",
            "artifact_extension": ".pkg.tar.zst",
            "sources_dir": "src",
            "release": "1",
        },
        "chroot": {
            "base_packages": ["base-devel"],
            "noconfirm": True,
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s",
        },
    }


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        try:
            file_config = _read_config_file(config_path)
            if file_config:
                config = merge_configs(config, file_config)
        except Exception as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ('.yaml', '.yml'):
        import yaml
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    with open(config_path, 'r') as f:
        return json.load(f)


def save_config(config, config_path: Optional[Path] = None):
    """Save configuration to file."""
    config_path = Path(config_path) if config_path else get_config_path()

    # Create directory if it doesn't exist
    config_path.parent.mkdir(parents=True, exist_ok=True)

    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        # tomllib is read-only
        import toml
        with open(config_path, 'w') as f:
            toml.dump(config, f)
    elif suffix in ('.yaml', '.yml'):
        import yaml
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: REPOBUILDER_SECTION_KEY
    For example: REPOBUILDER_BUILD_ARTIFACT_EXTENSION=.xz
    """
    env_prefix = "REPOBUILDER_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == 'REPOBUILDER_CONFIG':
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Longest config key matching the remaining parts wins
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            if i + best_match_len == len(key_parts):
                current_level[matched_key] = typed_value
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                break

    return config


def configure_logging(config: Dict[str, Any], verbose: bool = False) -> None:
    """Apply the logging section of the configuration to the root logger."""
    settings = config.get('logging', {})
    level_name = 'DEBUG' if verbose else str(settings.get('level', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    fmt = settings.get('format')
    if fmt:
        for handler in root.handlers:
            handler.setFormatter(logging.Formatter(fmt))


def _package_list(value) -> Tuple[str, ...]:
    """Package names from a list, or from a whitespace separated string."""
    if isinstance(value, str):
        return tuple(value.split())
    return tuple(value)


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration for one build-and-publish run.

    Constructed once at startup and passed to every service.
    """
    build_root: Path
    chroot: Path
    repo: Path
    repo_name: str
    pacman_config: Path
    dirty: bool = False
    force: bool = False
    descriptor: str = "PKGBUILD"
    artifact_extension: str = ".pkg.tar.zst"
    sources_dir: str = "src"
    release: str = "1"
    base_packages: Tuple[str, ...] = field(default_factory=lambda: ("base-devel",))
    noconfirm: bool = True

    @classmethod
    def from_options(
        cls,
        build_root,
        chroot,
        repo,
        repo_name: str,
        pacman_config,
        dirty: bool = False,
        force: bool = False,
        settings: Optional[Dict[str, Any]] = None,
    ) -> "PipelineConfig":
        """Build a PipelineConfig from CLI options and loaded settings."""
        settings = settings if settings is not None else get_default_config()
        build = settings.get('build', {})
        chroot_settings = settings.get('chroot', {})

        return cls(
            build_root=Path(build_root).expanduser().absolute(),
            chroot=Path(chroot).expanduser().absolute(),
            repo=Path(repo).expanduser().absolute(),
            repo_name=repo_name,
            pacman_config=Path(pacman_config).expanduser().absolute(),
            dirty=dirty,
            force=force,
            descriptor=build.get('descriptor', "PKGBUILD"),
            artifact_extension=build.get('artifact_extension', ".pkg.tar.zst"),
            sources_dir=build.get('sources_dir', "src"),
            release=str(build.get('release', "1")),
            base_packages=_package_list(chroot_settings.get('base_packages', ["base-devel"])),
            noconfirm=bool(chroot_settings.get('noconfirm', True)),
        )

    @property
    def chroot_root(self) -> Path:
        """The pristine chroot that makechrootpkg copies for each build."""
        return self.chroot / "root"

    @property
    def index_filename(self) -> str:
        return f"{self.repo_name}.db.tar.gz"

    @property
    def index_path(self) -> Path:
        return self.repo / self.index_filename
