import json
from types import SimpleNamespace

import llm
import pytest

from opmodels.engine.catalog import (
    Catalog,
    load_catalog,
    load_catalog_file,
    load_llm_catalog,
)
from opmodels.engine.errors import CatalogUnavailable, ResolutionError

class OpenAIChat:
    __module__ = "llm.default_plugins.openai_models"

    def __init__(self, model_id):
        self.model_id = model_id

class MistralModel:
    __module__ = "llm_mistral"

    def __init__(self, model_id):
        self.model_id = model_id

class AnthropicModel:
    __module__ = "llm_anthropic"

    def __init__(self, model_id):
        self.model_id = model_id

def _entry(model, aliases=(), async_only=False):
    if async_only:
        return SimpleNamespace(model=None, async_model=model, aliases=list(aliases))
    return SimpleNamespace(model=model, async_model=None, aliases=list(aliases))

def test_from_mapping_accepts_lists_and_mappings(catalog):
    assert catalog.providers() == ["anthropic", "openai", "openrouter"]
    assert catalog.models("anthropic") == ["claude-3-5-haiku-latest", "claude-3-5-sonnet-20241022"]
    assert catalog.has_model("openai", "gpt-4o-mini")
    assert not catalog.has_model("anthropic", "gpt-4o")
    assert catalog.models("missing") == []
    assert len(catalog) == 5

def test_catalog_does_not_share_source_data():
    data = {"openai": {"gpt-4o": {"context_window": 1}}}
    catalog = Catalog.from_mapping(data)
    data["openai"]["gpt-4o"]["context_window"] = 2
    data["anthropic"] = ["claude"]
    assert catalog.metadata("openai", "gpt-4o")["context_window"] == 1
    assert not catalog.has_provider("anthropic")
    with pytest.raises(TypeError):
        catalog.metadata("openai", "gpt-4o")["context_window"] = 3

@pytest.mark.parametrize("models", ["gpt-4o", 42])
def test_from_mapping_rejects_bad_entries(models):
    with pytest.raises(ValueError, match="must be a list or a mapping"):
        Catalog.from_mapping({"openai": models})

def test_load_yaml_file(catalog_file):
    catalog = load_catalog_file(catalog_file)
    assert catalog.providers() == ["anthropic", "openai"]
    assert dict(catalog.metadata("openai", "gpt-4o")) == {"context_window": 128000}
    assert dict(catalog.metadata("openai", "gpt-4o-mini")) == {}

def test_load_json_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"openai": ["gpt-4o"]}))
    assert load_catalog(path).models("openai") == ["gpt-4o"]

def test_missing_file_is_unavailable(tmp_path):
    with pytest.raises(CatalogUnavailable) as excinfo:
        load_catalog_file(tmp_path / "nope.yaml")
    assert excinfo.value.source.endswith("nope.yaml")
    assert not isinstance(excinfo.value, ResolutionError)

@pytest.mark.parametrize(
    "text",
    ["- openai\n- anthropic\n", "openai: gpt-4o\n", "openai:\n  gpt-4o: 5\n", "openai: [unclosed\n"],
)
def test_bad_file_contents_are_unavailable(tmp_path, text):
    path = tmp_path / "catalog.yaml"
    path.write_text(text)
    with pytest.raises(CatalogUnavailable):
        load_catalog_file(path)

def test_llm_catalog_derives_providers(monkeypatch):
    registered = [
        _entry(OpenAIChat("gpt-4o"), aliases=["4o"]),
        _entry(OpenAIChat("gpt-4o-mini")),
        _entry(MistralModel("mistral-large"), async_only=True),
        _entry(AnthropicModel("anthropic/claude-3-5-sonnet-20241022"), aliases=["sonnet"]),
    ]
    monkeypatch.setattr(llm, "get_models_with_aliases", lambda: registered)

    catalog = load_llm_catalog()

    assert catalog.providers() == ["anthropic", "mistral", "openai"]
    assert catalog.models("openai") == ["gpt-4o", "gpt-4o-mini"]
    assert dict(catalog.metadata("openai", "gpt-4o")) == {"llm_id": "gpt-4o", "aliases": ("4o",)}
    assert dict(catalog.metadata("anthropic", "claude-3-5-sonnet-20241022")) == {
        "llm_id": "anthropic/claude-3-5-sonnet-20241022",
        "aliases": ("sonnet",),
    }
    assert catalog.has_model("mistral", "mistral-large")

def test_llm_plugin_failure_is_unavailable(monkeypatch):
    def broken():
        raise RuntimeError("plugin exploded")

    monkeypatch.setattr(llm, "get_models_with_aliases", broken)
    with pytest.raises(CatalogUnavailable, match="plugin exploded"):
        load_catalog()
