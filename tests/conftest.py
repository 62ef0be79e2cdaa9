import pytest

from opmodels.engine.catalog import Catalog
from opmodels.engine.selection import ConfigSnapshot, OperationConfig

CATALOG_DATA = {
    "openai": {
        "gpt-4o": {"context_window": 128000},
        "gpt-4o-mini": None,
    },
    "anthropic": ["claude-3-5-sonnet-20241022", "claude-3-5-haiku-latest"],
    "openrouter": ["meta/llama-3-70b"],
}

CATALOG_YAML = """\
openai:
  gpt-4o:
    context_window: 128000
  gpt-4o-mini:
anthropic:
  - claude-3-5-sonnet-20241022
  - claude-3-5-haiku-latest
"""

@pytest.fixture(autouse=True)
def no_env_model(monkeypatch):
    monkeypatch.delenv("OPMODELS_MODEL", raising=False)

@pytest.fixture
def catalog():
    return Catalog.from_mapping(CATALOG_DATA)

@pytest.fixture
def snapshot():
    return ConfigSnapshot(
        global_model="openai/gpt-4o",
        operations={
            "commit": OperationConfig(
                model="anthropic/claude-3-5-sonnet-20241022",
                options={"temperature": 0.2},
            ),
            "branch": OperationConfig(),
        },
    )

@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(CATALOG_YAML)
    return path
