"""Per-call invocation context."""

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .models import Failed, ModelDescriptor, Resolved, ResolutionOutcome

DEFAULT_MODEL = "gpt-4.1-mini"

@dataclass(frozen=True)
class InvocationContext:
    """Everything the invoker needs for one model call.

    ``default_model`` is the invoker's own fallback (an ``llm`` model id);
    ``model`` is the resolved model for this call, if any.
    """

    default_model: Optional[str] = DEFAULT_MODEL
    model: Optional[ModelDescriptor] = None
    system: Optional[str] = None
    stream: bool = True
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

def with_model(base: InvocationContext, outcome: ResolutionOutcome) -> InvocationContext:
    """Return a copy of ``base`` carrying the resolution outcome.

    ``base`` is never touched. An unset outcome clears ``model`` so the
    invoker falls back to ``default_model``.

    Raises:
        ResolutionError: If the outcome is a failure; no context is built
    """
    if isinstance(outcome, Failed):
        raise outcome.error
    if isinstance(outcome, Resolved):
        return dataclasses.replace(base, model=outcome.descriptor)
    return dataclasses.replace(base, model=None)
