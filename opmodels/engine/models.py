"""Model resolution against the catalog."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

from .catalog import Catalog
from .errors import MalformedIdentifier, ResolutionError, UnknownModel, UnknownProvider

@dataclass(frozen=True)
class ModelDescriptor:
    """A validated provider/model pair.

    Only produced by ``resolve_model``; callers should not build these.
    """

    provider: str
    model_name: str
    metadata: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @property
    def identifier(self) -> str:
        return f"{self.provider}/{self.model_name}"

@dataclass(frozen=True)
class Resolved:
    descriptor: ModelDescriptor

@dataclass(frozen=True)
class Unset:
    """No model was configured at any layer. Not an error."""

UNSET = Unset()

@dataclass(frozen=True, eq=False)
class Failed:
    error: ResolutionError

    # Exceptions compare by identity; outcomes compare by value.
    def _key(self) -> Tuple[type, str]:
        return type(self.error), str(self.error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Failed):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

ResolutionOutcome = Union[Resolved, Unset, Failed]

def parse_identifier(identifier: str) -> Tuple[str, str]:
    """Split a model identifier into provider and model name.

    Args:
        identifier: String of the form ``provider/model-name``

    Returns:
        The ``(provider, model_name)`` pair; the model name may contain ``/``

    Raises:
        MalformedIdentifier: If there is no ``/`` or either segment is empty
    """
    provider, sep, model_name = identifier.partition("/")
    if not sep or not provider or not model_name:
        raise MalformedIdentifier(identifier)
    return provider, model_name

def resolve_model(identifier: Optional[str], catalog: Catalog) -> ResolutionOutcome:
    """Resolve a configured identifier against the catalog.

    Matching is exact and case-sensitive. Nothing is cached and nothing
    outside the arguments is read, so equal inputs give equal outcomes.

    Args:
        identifier: Identifier picked by ``select_model``, or None
        catalog: Populated catalog to validate against

    Returns:
        ``UNSET`` for None, ``Resolved`` on success, ``Failed`` otherwise
    """
    if identifier is None:
        return UNSET

    try:
        provider, model_name = parse_identifier(identifier)
    except MalformedIdentifier as e:
        return Failed(e)

    if not catalog.has_provider(provider):
        return Failed(UnknownProvider(provider, catalog.providers()))
    if not catalog.has_model(provider, model_name):
        return Failed(UnknownModel(provider, model_name, catalog.models(provider)))

    return Resolved(ModelDescriptor(
        provider=provider,
        model_name=model_name,
        metadata=catalog.metadata(provider, model_name),
    ))

def require_model(identifier: Optional[str], catalog: Catalog) -> Optional[ModelDescriptor]:
    """Like ``resolve_model`` but raises on failure.

    Returns:
        The descriptor, or None when no identifier was given

    Raises:
        ResolutionError: If the identifier does not resolve
    """
    outcome = resolve_model(identifier, catalog)
    if isinstance(outcome, Failed):
        raise outcome.error
    if isinstance(outcome, Resolved):
        return outcome.descriptor
    return None
