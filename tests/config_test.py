from pathlib import Path

import pytest
from pydantic import ValidationError

from snippet_catalog.config import DEFAULT_SEED_PATH, CatalogConfig


class TestCatalogConfig:
    """Test catalog configuration defaults and validation"""

    def test_defaults(self):
        config = CatalogConfig()

        assert config.db_name == "default"
        assert config.page_size == 48
        assert config.export_filename == "snippets.json"
        assert config.qualified_table_name == "snippets"
        assert config.resolved_seed_path() == DEFAULT_SEED_PATH

    def test_seed_path_is_coerced_to_path(self):
        config = CatalogConfig(seed_path="data/seed.json")

        assert config.seed_path == Path("data/seed.json")
        assert config.resolved_seed_path() == Path("data/seed.json")

    def test_plain_model_config(self):
        assert "arbitrary_types_allowed" not in CatalogConfig.model_config

    def test_schema_qualified_table(self):
        assert CatalogConfig(db_schema="app").qualified_table_name == "app.snippets"

    @pytest.mark.parametrize("field", [{"page_size": 0}, {"timeout": 0}])
    def test_invalid_values_rejected(self, field):
        with pytest.raises(ValidationError):
            CatalogConfig(**field)
