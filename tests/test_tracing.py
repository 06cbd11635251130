"""TraceController: markers from the hub and the composers."""

from heredity import Base, Runtime
from heredity.core.tracing import TraceContext, TraceController


class Draggable:
    def drag(self):
        return True


def test_disabled_controller_records_nothing():
    tc = TraceController()

    assert tc.mark("anything", data=1) is None
    assert tc.count_markers() == 0


def test_markers_and_queries():
    tc = TraceController(enabled=True)

    tc.mark("hub.registered", event_type="a")
    tc.mark("hub.removed", event_type="a")
    tc.mark("mixin.applied")

    assert tc.count_markers("hub.*") == 2
    assert tc.get_marker("hub.removed").data == {"event_type": "a"}
    assert tc.get_marker("hub.removed", index=1) is None
    assert tc.get_report()["marker_counts"] == {
        "hub.registered": 1,
        "hub.removed": 1,
        "mixin.applied": 1,
    }


def test_max_events_drops_oldest():
    tc = TraceController(enabled=True, max_events=2)

    tc.mark("first")
    tc.mark("second")
    tc.mark("third")

    assert [m.name for m in tc.get_markers()] == ["second", "third"]
    assert not tc.has_marker("first")


def test_context_restores_enabled_state(runtime):
    assert runtime.tracer.enabled is False

    with TraceContext() as tc:
        assert tc is runtime.tracer
        assert tc.enabled

    assert runtime.tracer.enabled is False


def test_hub_dispatch_markers(runtime):
    class Button(Base):
        pass

    button = Button()
    button.on("click", lambda event: False)
    button.on("click", lambda event: None)

    with TraceContext(runtime.tracer) as tc:
        button.trigger("click")

    assert tc.has_marker("hub.dispatch.started")
    assert tc.get_marker("hub.dispatch.stopped").data["position"] == 0
    assert not tc.has_marker("hub.dispatch.completed")


def test_mixin_marker_lists_members():
    rt = Runtime()
    rt.tracer.enable()

    class Panel:
        pass

    rt.mixin(Panel(), Draggable)

    assert rt.tracer.get_marker("mixin.applied").data["members"] == ["drag"]
