from __future__ import annotations

import pytest

from displayurl.runtime import extensions
from displayurl.runtime.extensions import ExtensionRegistry


class _Point:
    extension_point = True


class _First(_Point):
    pass


class _Second(_Point):
    pass


class _Unrelated:
    pass


def test_registry_infers_extension_point_from_marker() -> None:
    registry = ExtensionRegistry()
    first = _First()
    registry.register(first)
    assert registry.get_extension_list(_Point) == [first]
    assert registry.get_extension_list(_First) == []


def test_registry_orders_by_ordinal_then_registration() -> None:
    registry = ExtensionRegistry()
    low = _First()
    high = _Second()
    also_low = _First()
    registry.register(low)
    registry.register(high, ordinal=10)
    registry.register(also_low)
    assert registry.get_extension_list(_Point) == [high, low, also_low]


def test_registry_rejects_extension_not_implementing_point() -> None:
    registry = ExtensionRegistry()
    with pytest.raises(TypeError):
        registry.register(_Unrelated(), extension_type=_Point)


def test_registry_unregister_removes_instance() -> None:
    registry = ExtensionRegistry()
    first = _First()
    second = _Second()
    registry.register(first)
    registry.register(second)
    assert registry.unregister(first) is True
    assert registry.unregister(first) is False
    assert registry.get_extension_list(_Point) == [second]


class _FakeEntryPoint:
    def __init__(self, name: str, target: object) -> None:
        self.name = name
        self._target = target

    def load(self) -> object:
        return self._target


class _Prioritized(_Point):
    ordinal = 3


def test_registry_loads_entry_points(monkeypatch) -> None:
    requested_groups: list[str] = []

    def fake_entry_points(*, group: str):
        requested_groups.append(group)
        return [_FakeEntryPoint("first", _First), _FakeEntryPoint("prioritized", _Prioritized)]

    monkeypatch.setattr(extensions, "entry_points", fake_entry_points)
    registry = ExtensionRegistry()
    count = registry.load_entry_points("test.group", extension_type=_Point, factory=lambda cls: cls())

    assert count == 2
    assert requested_groups == ["test.group"]
    loaded = registry.get_extension_list(_Point)
    assert [type(item) for item in loaded] == [_Prioritized, _First]
