"""Tests for the schema registry."""

import json

import pytest

from connector_linter.config import Paths, ValidationSettings
from connector_linter.core.cache import ChecksumCacheStore
from connector_linter.core.compiler import CompilerPool, Dialect
from connector_linter.core.registry import (
    SchemaRegistry,
    SchemaSource,
    normalize_schema_id,
)
from connector_linter.exceptions import SchemaCompileError, SchemaLoadError
from connector_linter.schemas import SchemaIdentity

EXTENDED = ValidationSettings(extended_validation=True)
BASE_ONLY = ValidationSettings(extended_validation=False)


@pytest.fixture
def store(cache_dir):
    return ChecksumCacheStore(cache_dir)


@pytest.fixture
def registry(store):
    return SchemaRegistry(store, CompilerPool())


class TestNormalizeSchemaId:
    def test_legacy_id_moved(self):
        schema = {"id": "http://swagger.io/v2/schema.json#"}

        normalize_schema_id(schema)

        assert schema == {"$id": "http://swagger.io/v2/schema.json#"}

    def test_existing_dollar_id_wins(self):
        schema = {"id": "a", "$id": "b"}

        normalize_schema_id(schema)

        assert schema == {"id": "a", "$id": "b"}


class TestSchemaRegistry:
    """File name to schema resolution."""

    def test_unmapped_name_returns_none(self, registry):
        assert registry.resolve("package.json", EXTENDED) is None

    def test_lookup_ignores_case(self, registry):
        loaded = registry.resolve("SETTINGS.JSON", EXTENDED)

        assert loaded is not None
        assert loaded.schema_file == "paconn-settings.schema.json"

    def test_settings_has_no_extended_schema(self, registry):
        loaded = registry.resolve("settings.json", EXTENDED)

        assert loaded.is_extended is False
        assert loaded.dialect is Dialect.MODERN
        assert loaded.source is SchemaSource.BUNDLED

    def test_extended_schema_returned_when_enabled(self, registry):
        loaded = registry.resolve("apiProperties.json", EXTENDED)

        assert loaded.schema_file == "paconn-apiProperties.extended.schema.json"
        assert loaded.is_extended
        assert loaded.base.schema_file == "paconn-apiProperties.schema.json"

    def test_base_schema_returned_when_disabled(self, registry):
        loaded = registry.resolve("apiProperties.json", BASE_ONLY)

        assert loaded.schema_file == "paconn-apiProperties.schema.json"
        assert not loaded.is_extended

    def test_swagger_schemas_are_legacy_with_normalized_id(self, registry):
        loaded = registry.resolve("apiDefinition.swagger.json", EXTENDED)

        assert loaded.dialect is Dialect.LEGACY
        assert loaded.base.dialect is Dialect.LEGACY
        assert loaded.base.schema_id == "http://swagger.io/v2/schema.json#"
        assert "id" not in loaded.base.schema

    def test_schemas_registered_with_pool(self, store):
        pool = CompilerPool()
        registry = SchemaRegistry(store, pool)

        loaded = registry.resolve("apiProperties.json", EXTENDED)

        modern = pool.compiler(Dialect.MODERN)
        assert modern.has_schema(loaded.schema_id)
        assert modern.has_schema(loaded.base.schema_id)

    def test_cached_copy_preferred(self, registry, store):
        cached = {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "$id": "https://example.com/cached-settings.schema.json",
            "type": "object",
        }
        store.put("paconn-settings.schema.json", json.dumps(cached))

        loaded = registry.resolve("settings.json", EXTENDED)

        assert loaded.source is SchemaSource.CACHE
        assert loaded.schema_id == cached["$id"]

    def test_unparsable_cache_falls_back_to_bundled(
        self, registry, store, caplog
    ):
        store.put("paconn-settings.schema.json", "{ not json")

        loaded = registry.resolve("settings.json", EXTENDED)

        assert loaded.source is SchemaSource.BUNDLED
        assert "Ignoring unparsable cached schema" in caplog.text

    def test_loaded_schema_is_memoized(self, registry):
        first = registry.resolve("settings.json", EXTENDED)
        second = registry.resolve("settings.json", EXTENDED)

        assert first is second

    def test_invalidate_rereads_files(self, registry, store):
        first = registry.resolve("settings.json", EXTENDED)
        store.put(
            "paconn-settings.schema.json",
            json.dumps(
                {
                    "$schema": "http://json-schema.org/draft-07/schema#",
                    "$id": "https://example.com/new-settings.schema.json",
                }
            ),
        )

        registry.invalidate()
        second = registry.resolve("settings.json", EXTENDED)

        assert first.source is SchemaSource.BUNDLED
        assert second.source is SchemaSource.CACHE

    def test_missing_bundled_file_raises(self, store, tmp_path):
        registry = SchemaRegistry(
            store, CompilerPool(), bundled_dir=tmp_path / "empty"
        )

        with pytest.raises(SchemaLoadError, match="cannot read"):
            registry.resolve("settings.json", EXTENDED)

    def test_schema_without_marker_raises(self, store, tmp_path):
        (tmp_path / "s.schema.json").write_text('{"$id": "x"}')
        registry = SchemaRegistry(
            store,
            CompilerPool(),
            bundled_dir=tmp_path,
            table={"s.json": SchemaIdentity("https://x", "s.schema.json")},
        )

        with pytest.raises(SchemaLoadError, match=r"no \$schema"):
            registry.resolve("s.json", EXTENDED)

    def test_non_object_schema_raises(self, store, tmp_path):
        (tmp_path / "s.schema.json").write_text("[1, 2]")
        registry = SchemaRegistry(
            store,
            CompilerPool(),
            bundled_dir=tmp_path,
            table={"s.json": SchemaIdentity("https://x", "s.schema.json")},
        )

        with pytest.raises(SchemaLoadError, match="not a JSON object"):
            registry.resolve("s.json", EXTENDED)

    def test_schema_without_id_raises_compile_error(self, store, tmp_path):
        (tmp_path / "s.schema.json").write_text(
            '{"$schema": "http://json-schema.org/draft-07/schema#"}'
        )
        registry = SchemaRegistry(
            store,
            CompilerPool(),
            bundled_dir=tmp_path,
            table={"s.json": SchemaIdentity("https://x", "s.schema.json")},
        )

        with pytest.raises(SchemaCompileError):
            registry.resolve("s.json", EXTENDED)


def test_default_bundled_dir_is_package_schemas(store):
    registry = SchemaRegistry(store, CompilerPool())

    assert registry.bundled_dir == Paths.BUNDLED_SCHEMA_DIR
