"""Per-operation model resolution for the llm CLI."""

__version__ = "0.1.0"

from opmodels.engine.catalog import Catalog, load_catalog
from opmodels.engine.config import load_snapshot
from opmodels.engine.context import InvocationContext, with_model
from opmodels.engine.errors import (
    CatalogUnavailable,
    ConfigError,
    MalformedIdentifier,
    ResolutionError,
    UnknownModel,
    UnknownProvider,
)
from opmodels.engine.models import (
    UNSET,
    Failed,
    ModelDescriptor,
    Resolved,
    Unset,
    resolve_model,
)
from opmodels.engine.operations import prepare_context, resolve_operations
from opmodels.engine.selection import ConfigSnapshot, OperationConfig, select_model
from opmodels.engine.llm_runner import run_llm
from opmodels.engine.logging import setup_logging

__all__ = [
    "Catalog",
    "load_catalog",
    "load_snapshot",
    "InvocationContext",
    "with_model",
    "CatalogUnavailable",
    "ConfigError",
    "MalformedIdentifier",
    "ResolutionError",
    "UnknownModel",
    "UnknownProvider",
    "UNSET",
    "Failed",
    "ModelDescriptor",
    "Resolved",
    "Unset",
    "resolve_model",
    "prepare_context",
    "resolve_operations",
    "ConfigSnapshot",
    "OperationConfig",
    "select_model",
    "run_llm",
    "setup_logging",
]
