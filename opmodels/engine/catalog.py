"""Read-only catalog of known providers and their models."""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import llm
import yaml

from .errors import CatalogUnavailable

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})

ModelEntries = Union[Iterable[str], Mapping[str, Optional[Mapping[str, Any]]]]

class Catalog:
    """Immutable mapping of provider name -> model name -> metadata.

    Built once per process by a catalog source and only ever read by the
    resolver. Metadata is opaque here and handed through verbatim.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, Mapping[str, Any]]]):
        self._entries = MappingProxyType({
            provider: MappingProxyType({
                name: MappingProxyType(dict(meta)) for name, meta in models.items()
            })
            for provider, models in entries.items()
        })

    @classmethod
    def from_mapping(cls, data: Mapping[str, ModelEntries]) -> "Catalog":
        """Build a catalog from plain data.

        Args:
            data: Provider name mapped to either an iterable of model names
                or a mapping of model name to metadata (``None`` for none)

        Returns:
            A new catalog that shares no state with ``data``

        Raises:
            ValueError: If a provider's entry is not a list or mapping
        """
        entries: Dict[str, Dict[str, Mapping[str, Any]]] = {}
        for provider, models in data.items():
            if isinstance(models, Mapping):
                for name, meta in models.items():
                    if meta is not None and not isinstance(meta, Mapping):
                        raise ValueError(f"Metadata for '{provider}/{name}' must be a mapping")
                entries[str(provider)] = {
                    str(name): dict(meta or {}) for name, meta in models.items()
                }
            elif isinstance(models, (str, bytes)) or not isinstance(models, Iterable):
                raise ValueError(
                    f"Models for provider '{provider}' must be a list or a mapping"
                )
            else:
                entries[str(provider)] = {str(name): {} for name in models}
        return cls(entries)

    def providers(self) -> List[str]:
        return sorted(self._entries)

    def models(self, provider: str) -> List[str]:
        return sorted(self._entries.get(provider, _EMPTY))

    def has_provider(self, provider: str) -> bool:
        return provider in self._entries

    def has_model(self, provider: str, model_name: str) -> bool:
        return model_name in self._entries.get(provider, _EMPTY)

    def metadata(self, provider: str, model_name: str) -> Mapping[str, Any]:
        return self._entries[provider][model_name]

    def __len__(self) -> int:
        return sum(len(models) for models in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Catalog(providers={self.providers()!r})"

def load_catalog_file(path: Path) -> Catalog:
    """Load a catalog from a YAML or JSON file.

    Args:
        path: Catalog file; ``.json`` is parsed as JSON, anything else as YAML

    Returns:
        The loaded catalog

    Raises:
        CatalogUnavailable: If the file cannot be read or has the wrong shape
    """
    source = str(path)
    try:
        text = path.read_text()
        if path.suffix == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise CatalogUnavailable(source, str(e)) from e

    if not isinstance(raw, Mapping):
        raise CatalogUnavailable(source, "catalog file must contain a mapping of providers")
    try:
        catalog = Catalog.from_mapping(raw)
    except ValueError as e:
        raise CatalogUnavailable(source, str(e)) from e
    logger.debug("Loaded %d models from %s", len(catalog), source)
    return catalog

def _provider_for(model_id: str, module: str) -> str:
    if "/" in model_id:
        return model_id.split("/", 1)[0]
    if module.startswith("llm.default_plugins.openai"):
        return "openai"
    top = module.split(".", 1)[0]
    return top[len("llm_"):] if top.startswith("llm_") else top

def load_llm_catalog() -> Catalog:
    """Build a catalog from the models registered with the ``llm`` library.

    Model ids of the form ``provider/name`` are split on the first slash;
    other ids take their provider from the plugin module that registered
    them. The original ``llm`` id is kept as ``llm_id`` metadata so the
    invoker can hand it back to ``llm.get_model``.

    Raises:
        CatalogUnavailable: If plugin loading fails
    """
    try:
        registered = llm.get_models_with_aliases()
    except Exception as e:
        raise CatalogUnavailable("llm plugins", str(e)) from e

    entries: Dict[str, Dict[str, Dict[str, Any]]] = {}
    for entry in registered:
        model = entry.model or entry.async_model
        model_id = model.model_id
        provider = _provider_for(model_id, type(model).__module__)
        name = model_id.split("/", 1)[1] if "/" in model_id else model_id
        meta: Dict[str, Any] = {"llm_id": model_id}
        if entry.aliases:
            meta["aliases"] = tuple(entry.aliases)
        entries.setdefault(provider, {})[name] = meta

    catalog = Catalog(entries)
    logger.debug("Loaded %d models from llm plugins", len(catalog))
    return catalog

def load_catalog(path: Optional[Path] = None) -> Catalog:
    """Load the catalog from ``path`` if given, otherwise from ``llm``."""
    if path is not None:
        return load_catalog_file(path)
    return load_llm_catalog()
