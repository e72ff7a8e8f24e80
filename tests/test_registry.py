"""Tests for the value-meta registry."""

import pytest

from rowmeta.core.registry import (
    ValueMetaPlugin,
    ValueMetaRegistry,
    get_value_meta,
    list_value_metas,
    unregister_value_meta,
    value_meta_plugin,
)
from rowmeta.exceptions import DuplicateValueMetaError, UnknownValueMetaError


class _Meta:
    def __init__(self, name=None, **kwargs):
        self.name = name
        self.options = kwargs


class _OtherMeta(_Meta):
    pass


class TestValueMetaRegistry:
    """Tests for ValueMetaRegistry."""

    def test_register_and_get(self) -> None:
        """Test lookup by id and by name."""
        registry = ValueMetaRegistry()
        plugin = ValueMetaPlugin(id=500, name="Thing", description="A thing", meta_class=_Meta)
        registry.register(plugin)

        assert registry.get(500) is plugin
        assert registry.get_by_name("thing") is plugin
        assert registry.list_types() == ["Thing"]

    def test_register_same_plugin_twice(self) -> None:
        """Test re-registering an identical plugin is a no-op."""
        registry = ValueMetaRegistry()
        plugin = ValueMetaPlugin(id=500, name="Thing", description="A thing", meta_class=_Meta)
        registry.register(plugin)
        registry.register(plugin)

        assert registry.list_types() == ["Thing"]

    def test_duplicate_id(self) -> None:
        """Test another class under a taken id is rejected."""
        registry = ValueMetaRegistry()
        registry.register(ValueMetaPlugin(500, "Thing", "A thing", _Meta))

        with pytest.raises(DuplicateValueMetaError):
            registry.register(ValueMetaPlugin(500, "Other", "Other", _OtherMeta))

    def test_duplicate_name(self) -> None:
        """Test another class under a taken name is rejected."""
        registry = ValueMetaRegistry()
        registry.register(ValueMetaPlugin(500, "Thing", "A thing", _Meta))

        with pytest.raises(DuplicateValueMetaError):
            registry.register(ValueMetaPlugin(501, "THING", "Other", _OtherMeta))

    def test_unknown(self) -> None:
        """Test unknown keys raise UnknownValueMetaError."""
        registry = ValueMetaRegistry()

        with pytest.raises(UnknownValueMetaError):
            registry.get(1)
        with pytest.raises(UnknownValueMetaError):
            registry.get_by_name("nope")

    def test_create(self) -> None:
        """Test creating a handler passes the column name and options."""
        registry = ValueMetaRegistry()
        registry.register(ValueMetaPlugin(500, "Thing", "A thing", _Meta))

        meta = registry.create("Thing", "col", sort_descending=True)

        assert isinstance(meta, _Meta)
        assert meta.name == "col"
        assert meta.options == {"sort_descending": True}

    def test_clear(self) -> None:
        """Test clearing the registry."""
        registry = ValueMetaRegistry()
        registry.register(ValueMetaPlugin(500, "Thing", "A thing", _Meta))
        registry.clear()

        assert registry.list_types() == []


@pytest.fixture
def decorated_type_id():
    """Type id for decorator tests, removed from the global registry afterwards."""
    type_id = 9001
    yield type_id
    unregister_value_meta(type_id)


class TestValueMetaPluginDecorator:
    """Tests for the value_meta_plugin decorator."""

    def test_decorator_registers_globally(self, decorated_type_id: int) -> None:
        """Test decorated classes land in the global registry."""

        @value_meta_plugin(id=decorated_type_id, name="DecoratedThing", description="Test type")
        class DecoratedThing(_Meta):
            pass

        assert get_value_meta(decorated_type_id).meta_class is DecoratedThing
        assert get_value_meta("decoratedthing").description == "Test type"
        assert DecoratedThing.plugin.id == decorated_type_id
        assert "DecoratedThing" in list_value_metas()

    def test_unregister_restores_global_registry(self, decorated_type_id: int) -> None:
        """Test unregistering removes both the id and the name."""

        @value_meta_plugin(id=decorated_type_id, name="TransientThing", description="Test type")
        class TransientThing(_Meta):
            pass

        unregister_value_meta(decorated_type_id)

        assert "TransientThing" not in list_value_metas()
        with pytest.raises(UnknownValueMetaError):
            get_value_meta("TransientThing")

    def test_unregister_unknown_id(self) -> None:
        """Test unregistering an unknown id is a no-op."""
        registry = ValueMetaRegistry()
        registry.unregister(12345)

        assert registry.list_types() == []
