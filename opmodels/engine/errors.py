"""Error taxonomy for model resolution and its collaborators."""

from typing import Iterable, List

def _format_choices(choices: List[str]) -> str:
    return ", ".join(choices) if choices else "none"

class OpmodelsError(Exception):
    """Base class for every error raised by opmodels."""

class ResolutionError(OpmodelsError):
    """A configured model identifier could not be resolved.

    These are configuration mistakes. They are never retried and never
    replaced by a fallback model.
    """

class MalformedIdentifier(ResolutionError):
    """The identifier is not of the form ``provider/model-name``.

    Args:
        identifier: The offending configured string
    """

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f"Invalid model identifier '{identifier}': expected '<provider>/<model-name>'"
        )

class UnknownProvider(ResolutionError):
    """The provider segment is not in the catalog.

    Args:
        provider: Requested provider name
        known_providers: Every provider the catalog knows; stored sorted
    """

    def __init__(self, provider: str, known_providers: Iterable[str]):
        self.provider = provider
        self.known_providers = sorted(known_providers)
        super().__init__(
            f"Unknown provider '{provider}'. "
            f"Known providers: {_format_choices(self.known_providers)}"
        )

class UnknownModel(ResolutionError):
    """The provider is known but the model is not one of its models.

    Args:
        provider: Requested (known) provider name
        model_name: Requested model name
        known_models: Every model of that provider; stored sorted
    """

    def __init__(self, provider: str, model_name: str, known_models: Iterable[str]):
        self.provider = provider
        self.model_name = model_name
        self.known_models = sorted(known_models)
        super().__init__(
            f"Unknown model '{model_name}' for provider '{provider}'. "
            f"Known models: {_format_choices(self.known_models)}"
        )

class CatalogUnavailable(OpmodelsError):
    """The catalog could not be populated (unreadable file, broken plugin)."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Model catalog unavailable from {source}: {reason}")

class ConfigError(OpmodelsError):
    """A configuration file has the wrong shape."""
