"""mixin: flattened members, initializer replay, recorded application."""

import logging

import pytest

from heredity import (
    DuplicateMixinError,
    HeredityConfig,
    NotAMixinError,
    Runtime,
    get_runtime,
    is_a,
    mixin,
)


class View:
    def __init__(self, name):
        self.name = name

    def describe(self):
        return f"view {self.name}"


class Scrollable:
    speed = 1

    def __init__(self, speed=1):
        self.offset = 0
        self.speed = speed

    def scroll(self, amount):
        self.offset += amount * self.speed
        return self.offset


class Draggable:
    def __init__(self):
        self.dragging = False

    def start_drag(self):
        self.dragging = True
        return self


class FastScrollable(Scrollable):
    def scroll(self, amount):
        self.offset += amount * 10
        return self.offset


class Tagged:
    @classmethod
    def kind(cls):
        return cls.__name__

    @staticmethod
    def version():
        return 2


class WithProperty:
    label = "plain"

    @property
    def computed(self):
        return 42


class Slotted:
    __slots__ = ("x",)


def test_mixin_returns_instance_and_binds_methods():
    view = View("main")

    assert mixin(view, Scrollable) is view
    assert view.scroll(3) == 3
    assert view.scroll(2) == 5
    assert view.describe() == "view main"


def test_initializer_receives_arguments():
    view = mixin(View("main"), Scrollable, speed=4)

    assert view.speed == 4
    assert view.scroll(1) == 4


def test_class_is_untouched():
    view = mixin(View("main"), Scrollable)

    assert type(view) is View
    assert not isinstance(view, Scrollable)
    assert Scrollable not in type(view).__mro__


def test_capability_query_sees_mixin():
    view = mixin(View("main"), Scrollable)

    assert is_a(view, Scrollable)
    assert is_a(view, View)
    assert not is_a(view, Draggable)
    assert get_runtime().ancestry.mixes_in(view, Scrollable)


def test_application_order_is_recorded():
    view = View("main")

    mixin(view, Scrollable)
    mixin(view, Draggable)

    assert get_runtime().ancestry.mixins(view) == [Scrollable, Draggable]


def test_later_mixin_overwrites_members():
    view = View("main")

    mixin(view, Scrollable)
    mixin(view, FastScrollable)

    assert view.scroll(1) == 10


def test_inherited_mixin_members_are_flattened():
    view = mixin(View("main"), FastScrollable)

    assert view.speed == 1
    assert view.scroll(2) == 20
    assert not is_a(view, Scrollable)


def test_classmethods_and_staticmethods():
    view = mixin(View("main"), Tagged)

    assert view.kind() == "Tagged"
    assert view.version() == 2


def test_data_descriptors_are_skipped(caplog):
    view = View("main")

    with caplog.at_level(logging.WARNING, logger="heredity"):
        mixin(view, WithProperty)

    assert view.label == "plain"
    assert "computed" not in vars(view)
    assert "WithProperty.computed" in caplog.text


def test_dunder_members_are_not_copied():
    view = mixin(View("main"), Scrollable)

    assert "__init__" not in vars(view)
    assert "__module__" not in vars(view)


def test_non_class_mixin_is_rejected():
    with pytest.raises(NotAMixinError):
        mixin(View("main"), lambda self: None)


def test_class_receiver_is_rejected():
    with pytest.raises(NotAMixinError):
        mixin(View, Scrollable)


def test_receiver_without_dict_is_rejected():
    with pytest.raises(NotAMixinError):
        mixin(Slotted(), Scrollable)


def test_arguments_without_initializer_are_rejected():
    with pytest.raises(NotAMixinError):
        mixin(View("main"), Tagged, 1)


def test_duplicate_append_reruns_initializer():
    view = View("main")
    mixin(view, Scrollable)
    view.scroll(5)

    mixin(view, Scrollable)

    assert view.offset == 0
    assert get_runtime().ancestry.mixins(view) == [Scrollable, Scrollable]


def test_duplicate_ignore_is_idempotent():
    rt = Runtime(HeredityConfig(duplicate_mixins="ignore"))
    view = View("main")
    rt.mixin(view, Scrollable)
    view.scroll(5)

    rt.mixin(view, Scrollable)

    assert view.offset == 5
    assert rt.ancestry.mixins(view) == [Scrollable]


def test_duplicate_error_raises_before_applying():
    rt = Runtime(HeredityConfig(duplicate_mixins="error"))
    view = View("main")
    rt.mixin(view, Scrollable)
    view.scroll(5)

    with pytest.raises(DuplicateMixinError):
        rt.mixin(view, Scrollable)

    assert view.offset == 5


def test_initializer_failure_leaves_no_record():
    class Broken:
        def __init__(self):
            raise RuntimeError("init failed")

    view = View("main")

    with pytest.raises(RuntimeError):
        mixin(view, Broken)

    assert not get_runtime().ancestry.mixes_in(view, Broken)
