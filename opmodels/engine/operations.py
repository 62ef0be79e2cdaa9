"""Select, resolve and build the context for a named operation."""

import dataclasses
from pathlib import Path
from typing import Dict, Iterable, Optional

from .catalog import Catalog
from .context import InvocationContext, with_model
from .logging import log_step
from .models import Failed, Resolved, ResolutionOutcome, resolve_model
from .selection import ConfigSnapshot, select_model, selection_source

def describe_outcome(outcome: ResolutionOutcome) -> Dict[str, Optional[str]]:
    """Summarize an outcome as plain data for logs and JSON output."""
    if isinstance(outcome, Resolved):
        return {"outcome": "resolved", "model": outcome.descriptor.identifier}
    if isinstance(outcome, Failed):
        return {"outcome": type(outcome.error).__name__, "error": str(outcome.error)}
    return {"outcome": "unset"}

def resolve_operation(
    snapshot: ConfigSnapshot,
    operation: str,
    catalog: Catalog,
    log_file: Optional[Path] = None,
) -> ResolutionOutcome:
    """Resolve the model configured for one operation and log the result."""
    identifier = select_model(snapshot, operation)
    outcome = resolve_model(identifier, catalog)
    log_step(
        "resolve",
        {
            "operation": operation,
            "identifier": identifier,
            "source": selection_source(snapshot, operation),
            **describe_outcome(outcome),
        },
        log_file,
    )
    return outcome

def resolve_operations(
    snapshot: ConfigSnapshot,
    operations: Iterable[str],
    catalog: Catalog,
    log_file: Optional[Path] = None,
) -> Dict[str, ResolutionOutcome]:
    """Resolve several operations independently.

    A failure for one operation is returned in its slot and does not stop
    the others.
    """
    return {
        operation: resolve_operation(snapshot, operation, catalog, log_file)
        for operation in operations
    }

def prepare_context(
    snapshot: ConfigSnapshot,
    operation: str,
    catalog: Catalog,
    base: InvocationContext,
    log_file: Optional[Path] = None,
) -> InvocationContext:
    """Build the context to invoke ``operation`` with.

    Operation options from config sit underneath ``base.options``; keys
    already on ``base`` win. A failed resolution is raised as-is and never
    falls back to the global model.

    Raises:
        ResolutionError: If the selected identifier does not resolve
    """
    outcome = resolve_operation(snapshot, operation, catalog, log_file)
    context = with_model(base, outcome)
    options = {**snapshot.operation(operation).options, **base.options}
    return dataclasses.replace(context, options=options)
