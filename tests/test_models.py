import pytest

from opmodels.engine.catalog import Catalog
from opmodels.engine.errors import MalformedIdentifier, UnknownModel, UnknownProvider
from opmodels.engine.models import (
    UNSET,
    Failed,
    ModelDescriptor,
    Resolved,
    parse_identifier,
    require_model,
    resolve_model,
)
from conftest import CATALOG_DATA

def _all_identifiers():
    for provider, models in CATALOG_DATA.items():
        for name in models:
            yield provider, name

@pytest.mark.parametrize("provider,model_name", list(_all_identifiers()))
def test_every_catalog_entry_resolves(catalog, provider, model_name):
    outcome = resolve_model(f"{provider}/{model_name}", catalog)
    assert isinstance(outcome, Resolved)
    assert outcome.descriptor.provider == provider
    assert outcome.descriptor.model_name == model_name
    assert outcome.descriptor.identifier == f"{provider}/{model_name}"

def test_metadata_attached_verbatim(catalog):
    outcome = resolve_model("openai/gpt-4o", catalog)
    assert dict(outcome.descriptor.metadata) == {"context_window": 128000}
    assert dict(resolve_model("openai/gpt-4o-mini", catalog).descriptor.metadata) == {}

def test_model_name_may_contain_slash(catalog):
    outcome = resolve_model("openrouter/meta/llama-3-70b", catalog)
    assert outcome.descriptor.provider == "openrouter"
    assert outcome.descriptor.model_name == "meta/llama-3-70b"

@pytest.mark.parametrize("identifier", ["gpt-4o", "", "/gpt-4o", "openai/", "/"])
def test_malformed_identifiers(catalog, identifier):
    outcome = resolve_model(identifier, catalog)
    assert isinstance(outcome, Failed)
    assert isinstance(outcome.error, MalformedIdentifier)
    assert outcome.error.identifier == identifier
    assert "expected '<provider>/<model-name>'" in str(outcome.error)

def test_parse_identifier_splits_on_first_slash():
    assert parse_identifier("a/b/c") == ("a", "b/c")
    with pytest.raises(MalformedIdentifier):
        parse_identifier("no-slash")

def test_unknown_provider_lists_all_providers(catalog):
    outcome = resolve_model("badprovider/x", catalog)
    assert isinstance(outcome.error, UnknownProvider)
    assert outcome.error.provider == "badprovider"
    assert outcome.error.known_providers == ["anthropic", "openai", "openrouter"]
    assert "anthropic, openai, openrouter" in str(outcome.error)

def test_unknown_model_lists_provider_models(catalog):
    outcome = resolve_model("openai/gpt-5", catalog)
    assert isinstance(outcome.error, UnknownModel)
    assert outcome.error.provider == "openai"
    assert outcome.error.model_name == "gpt-5"
    assert outcome.error.known_models == ["gpt-4o", "gpt-4o-mini"]
    assert "gpt-4o, gpt-4o-mini" in str(outcome.error)

def test_matching_is_case_sensitive_and_exact(catalog):
    assert isinstance(resolve_model("OpenAI/gpt-4o", catalog).error, UnknownProvider)
    assert isinstance(resolve_model("openai/GPT-4o", catalog).error, UnknownModel)
    assert isinstance(resolve_model("openai/gpt-4", catalog).error, UnknownModel)
    assert isinstance(resolve_model("openai/ gpt-4o", catalog).error, UnknownModel)

@pytest.mark.parametrize("data", [{}, CATALOG_DATA])
def test_none_is_unset_regardless_of_catalog(data):
    assert resolve_model(None, Catalog.from_mapping(data)) is UNSET

def test_empty_catalog_reports_no_providers():
    outcome = resolve_model("openai/gpt-4o", Catalog.from_mapping({}))
    assert "Known providers: none" in str(outcome.error)

@pytest.mark.parametrize(
    "identifier",
    [None, "openai/gpt-4o", "bad", "badprovider/x", "openai/gpt-5"],
)
def test_resolution_is_idempotent(catalog, identifier):
    assert resolve_model(identifier, catalog) == resolve_model(identifier, catalog)

def test_failed_outcomes_differ_by_error(catalog):
    assert resolve_model("openai/gpt-5", catalog) != resolve_model("openai/gpt-6", catalog)

def test_descriptor_is_immutable(catalog):
    descriptor = resolve_model("openai/gpt-4o", catalog).descriptor
    with pytest.raises(AttributeError):
        descriptor.provider = "anthropic"
    with pytest.raises(TypeError):
        descriptor.metadata["context_window"] = 1

def test_descriptor_is_hashable():
    assert hash(ModelDescriptor("openai", "gpt-4o")) == hash(ModelDescriptor("openai", "gpt-4o"))

def test_require_model(catalog):
    assert require_model("anthropic/claude-3-5-haiku-latest", catalog).provider == "anthropic"
    assert require_model(None, catalog) is None
    with pytest.raises(UnknownProvider):
        require_model("nope/x", catalog)
