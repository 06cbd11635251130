"""Base: the wrapper type's class-level and instance-level surface."""

import pytest

from heredity import Base, Runtime


class Scrollable:
    def __init__(self):
        self.offset = 0

    def scroll(self, amount):
        self.offset += amount
        return self.offset


class Draggable:
    def drag(self):
        return "dragging"


def test_inherited_handler_collects_subclasses():
    class Person(Base):
        pass

    class Employee(Base):
        pass

    Person.subclasses = []
    Person.on("inherited", lambda event, child: Person.subclasses.append(child))

    Employee.inherit(Person)

    assert Person.subclasses == [Employee]
    assert Employee.is_subclass_of(Person)
    assert Person.is_superclass_of(Employee)
    assert Person in Employee.ancestors


def test_ancestors_end_at_object():
    class Person(Base):
        pass

    class Employee(Person):
        pass

    assert Employee.ancestors == [Person, Base, object]
    assert Employee.superclass is Person
    assert Employee().ancestors == [Person, Base, object]


def test_native_subclass_announces_itself():
    class Person(Base):
        pass

    seen = []
    Person.on("inherited", lambda event, child: seen.append((event.source, child)))

    class Manager(Person):
        pass

    assert seen == [(Person, Manager)]
    assert Person.direct_subclasses() == [Manager]


def test_base_observes_every_new_class(runtime):
    seen = []
    runtime.on(Base, "inherited", lambda event, child: seen.append(child.__name__))

    class Widget(Base):
        pass

    class Button(Widget):
        pass

    assert seen == ["Widget"]


def test_inherit_moves_subclass_between_parents():
    class Person(Base):
        pass

    class Robot(Base):
        pass

    class Employee(Person):
        pass

    Employee.inherit(Robot)

    assert Person.direct_subclasses() == []
    assert Robot.direct_subclasses() == [Employee]
    assert isinstance(Employee(), Robot)
    assert not isinstance(Employee(), Person)


def test_mixins_are_listed_in_order():
    class View(Base):
        pass

    view = View()
    view.mixin(Scrollable)
    view.mixin(Draggable)

    assert view.mixins == [Scrollable, Draggable]
    assert view.mixes_in(Scrollable)
    assert view.is_a(Draggable)
    assert view.is_a(View)
    assert not isinstance(view, Scrollable)
    assert view.scroll(2) == 2
    assert view.drag() == "dragging"


def test_class_and_instance_events_are_separate():
    class Button(Base):
        pass

    button = Button()
    calls = []
    Button.on("click", lambda event: calls.append(("class", event.source)))
    button.on("click", lambda event: calls.append(("instance", event.source)))

    assert button.trigger("click") is True
    assert Button.trigger("click") is True

    assert calls == [("instance", button), ("class", Button)]


def test_event_methods_chain_on_owner():
    class Button(Base):
        pass

    button = Button()
    handler = lambda event: None  # noqa: E731

    assert button.on("click", handler) is button
    assert button.off("click", handler) is button
    assert Button.once("click", handler) is Button


def test_trigger_stops_on_false():
    class Form(Base):
        pass

    form = Form()
    calls = []
    form.on("submit", lambda event: calls.append("validate") or False)
    form.on("submit", lambda event: calls.append("send"))

    assert form.trigger("submit") is False
    assert calls == ["validate"]


def test_guids():
    class Thing(Base):
        pass

    a, b = Thing(), Thing()

    assert a.guid == a.guid
    assert a.guid != b.guid
    assert Thing.class_guid() not in (a.guid, b.guid)


def test_registrations_stay_off_the_instance():
    class Thing(Base):
        pass

    thing = Thing()
    thing.on("x", lambda event: None)
    thing.mixin(Draggable)

    assert set(vars(thing)) == {"drag"}


def test_pinned_runtime_is_used(runtime):
    isolated = Runtime()

    class Isolated(Base):
        __heredity_runtime__ = isolated

    class Child(Isolated):
        pass

    assert isolated.ancestry.superclass(Child) is Isolated
    assert runtime.ancestry.superclass(Child) is object

    child = Child()
    child.mixin(Draggable)
    assert isolated.ancestry.mixins(child) == [Draggable]
    assert runtime.ancestry.mixins(child) == []


def test_inherit_onto_own_descendant_is_rejected():
    from heredity import InheritanceCycleError

    class Person(Base):
        pass

    class Employee(Person):
        pass

    with pytest.raises(InheritanceCycleError):
        Person.inherit(Employee)


def test_plain_leading_base_does_not_become_the_superclass(runtime):
    on_base, on_plain = [], []
    runtime.on(Base, "inherited", lambda event, child: on_base.append(child))
    runtime.on(Draggable, "inherited", lambda event, child: on_plain.append(child))

    class Widget(Draggable, Base):
        pass

    assert Widget.superclass is Base
    assert Widget.ancestors == [Base, object]
    assert Widget.is_subclass_of(Base)
    assert not Widget.is_subclass_of(Draggable)
    assert on_base == [Widget]
    assert on_plain == []
    assert Widget().drag() == "dragging"


@pytest.mark.parametrize(
    "name",
    [
        "on", "once", "off", "trigger", "guid", "class_guid", "inherit", "superclass",
        "ancestors", "is_subclass_of", "is_superclass_of", "direct_subclasses",
        "mixin", "mixins", "mixes_in", "is_a",
    ],
)
def test_public_members_are_documented(name):
    assert vars(Base)[name].__doc__
