"""extend: shallow copy of own entries."""

import pytest

from heredity import extend


class Target:
    pass


class Source:
    shared = "class level"

    def __init__(self):
        self.own = 1


def test_mapping_target_receives_items():
    target = {"a": 1}

    result = extend(target, {"b": 2}, {"a": 3})

    assert result is target
    assert target == {"a": 3, "b": 2}


def test_object_target_receives_attributes():
    target = Target()

    extend(target, {"x": 1, "y": 2})

    assert (target.x, target.y) == (1, 2)


def test_object_source_copies_only_own_entries():
    target = {}

    extend(target, Source())

    assert target == {"own": 1}


def test_copy_is_shallow():
    nested = [1, 2]
    target = {}

    extend(target, {"items": nested})

    assert target["items"] is nested


def test_source_without_entries_is_rejected():
    with pytest.raises(TypeError):
        extend({}, 42)
