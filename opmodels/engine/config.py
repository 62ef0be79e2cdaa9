"""Load and merge layered configuration into a snapshot."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import typer
import yaml

from .errors import ConfigError
from .selection import ConfigSnapshot, OperationConfig

logger = logging.getLogger(__name__)

APP_NAME = "opmodels"
CONFIG_FILENAME = "config.yaml"
LOCAL_CONFIG_FILENAME = ".opmodels.yaml"
MODEL_ENV_VAR = "OPMODELS_MODEL"

def default_global_path() -> Path:
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILENAME

def default_local_path() -> Path:
    return Path.cwd() / LOCAL_CONFIG_FILENAME

def _read_layer(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug("Config layer %s not found, skipping", path)
        return {}
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Config file must contain a YAML mapping: {path}")
    logger.debug("Read config layer %s", path)
    return dict(raw)

def _check_model(value: Any, where: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise ConfigError(f"'{where}' must be a string like 'provider/model', got {value!r}")

def merge_layers(*layers: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge raw config layers, later layers winning.

    Operations merge key by key, so a project file can change ``commit.model``
    while keeping ``commit.temperature`` from the global file. An explicit
    ``model: null`` clears the value from earlier layers.
    """
    merged: Dict[str, Any] = {"operations": {}}
    for layer in layers:
        if "model" in layer:
            merged["model"] = layer["model"]
        operations = layer.get("operations") or {}
        if not isinstance(operations, Mapping):
            raise ConfigError("'operations' must be a mapping of operation name to settings")
        for name, settings in operations.items():
            settings = settings or {}
            if not isinstance(settings, Mapping):
                raise ConfigError(f"Settings for operation '{name}' must be a mapping")
            merged["operations"].setdefault(str(name), {}).update(settings)
    return merged

def build_snapshot(merged: Mapping[str, Any]) -> ConfigSnapshot:
    operations = {}
    for name, settings in merged.get("operations", {}).items():
        settings = dict(settings)
        model = _check_model(settings.pop("model", None), f"{name}.model")
        operations[name] = OperationConfig(model=model, options=settings)
    return ConfigSnapshot(
        global_model=_check_model(merged.get("model"), "model"),
        operations=operations,
    )

def load_snapshot(
    global_path: Optional[Path] = None,
    local_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigSnapshot:
    """Load the configuration snapshot for this process.

    Args:
        global_path: Global config file (defaults to the per-user app dir)
        local_path: Project-local config file (defaults to ./.opmodels.yaml)
        environ: Environment to read ``OPMODELS_MODEL`` from (defaults to os.environ)

    Returns:
        The merged, immutable snapshot

    Raises:
        ConfigError: If any layer has the wrong shape
    """
    environ = os.environ if environ is None else environ
    layers = [
        _read_layer(global_path or default_global_path()),
        _read_layer(local_path or default_local_path()),
    ]
    env_model = environ.get(MODEL_ENV_VAR, "").strip()
    if env_model:
        layers.append({"model": env_model})
    return build_snapshot(merge_layers(*layers))
