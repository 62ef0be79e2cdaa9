"""Configuration snapshot and per-operation model selection."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))

@dataclass(frozen=True)
class OperationConfig:
    """Settings scoped to one operation.

    ``options`` carries every other per-operation key, so new knobs need
    no new plumbing.
    """

    model: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "options", _frozen(self.options))

@dataclass(frozen=True)
class ConfigSnapshot:
    """Merged, read-only view of user configuration."""

    global_model: Optional[str] = None
    operations: Mapping[str, OperationConfig] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "operations", _frozen(self.operations))

    def operation(self, name: str) -> OperationConfig:
        return self.operations.get(name) or OperationConfig()

def select_model(snapshot: ConfigSnapshot, operation: str) -> Optional[str]:
    """Pick the identifier to resolve for an operation.

    The operation's own model wins when non-empty, then the global model.
    Absence everywhere returns None, which is not an error.
    """
    override = snapshot.operation(operation).model
    if override:
        return override
    return snapshot.global_model or None

def selection_source(snapshot: ConfigSnapshot, operation: str) -> str:
    """Name the layer ``select_model`` takes its answer from."""
    if snapshot.operation(operation).model:
        return "operation"
    if snapshot.global_model:
        return "global"
    return "unset"
