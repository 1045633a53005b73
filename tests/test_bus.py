import pytest

from notifier.bus import EventBus
from notifier.models import Notification

TOPIC = "Airbus.A380.didTakeOff"


def make_recorder():
    calls = []
    return calls, calls.append


def test_publish_delivers_object_and_user_info_once():
    bus = EventBus()
    calls, cb = make_recorder()
    plane = object()
    bus.subscribe(TOPIC, cb, observer="tower")

    bus.publish(TOPIC, plane, {"runway": "27L"})

    assert len(calls) == 1
    note = calls[0]
    assert isinstance(note, Notification)
    assert note.name == TOPIC
    assert note.object is plane
    assert note.user_info == {"runway": "27L"}
    assert note.get("runway") == "27L"
    assert note.get("gate", "n/a") == "n/a"


def test_publish_without_observers_is_noop():
    bus = EventBus()
    assert bus.publish(TOPIC, object(), {"x": 1}) is None
    assert bus.topics() == frozenset()


def test_other_topic_is_not_delivered():
    bus = EventBus()
    calls, cb = make_recorder()
    bus.subscribe(TOPIC, cb)
    bus.publish("Airbus.A350.didTakeOff")
    assert calls == []


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    calls, cb = make_recorder()
    observer = object()
    bus.subscribe(TOPIC, cb, observer=observer)

    bus.unsubscribe(observer, TOPIC)
    bus.publish(TOPIC)

    assert calls == []
    assert not bus.has_subscribers(TOPIC)


def test_unsubscribe_unknown_registration_is_noop():
    bus = EventBus()
    calls, cb = make_recorder()
    bus.subscribe(TOPIC, cb, observer="tower")

    bus.unsubscribe("someone-else", TOPIC)
    bus.unsubscribe("tower", "Airbus.A350.didLand")
    bus.unsubscribe(None, TOPIC)
    bus.publish(TOPIC)

    assert len(calls) == 1


def test_unsubscribe_without_topic_removes_all_for_observer():
    bus = EventBus()
    calls, cb = make_recorder()
    observer = object()
    bus.subscribe(TOPIC, cb, observer=observer)
    bus.subscribe("Airbus.A380.didLand", cb, observer=observer)
    bus.subscribe(TOPIC, cb, observer="other")

    bus.unsubscribe(observer)
    bus.publish(TOPIC)
    bus.publish("Airbus.A380.didLand")

    assert len(calls) == 1
    assert bus.topics() == frozenset({TOPIC})


def test_observer_identity_not_equality():
    bus = EventBus()
    calls, cb = make_recorder()
    a, b = [1], [1]     # equal but distinct
    bus.subscribe(TOPIC, cb, observer=a)

    bus.unsubscribe(b, TOPIC)
    bus.publish(TOPIC)

    assert len(calls) == 1


def test_object_filter_only_passes_matching_sender():
    bus = EventBus()
    calls, cb = make_recorder()
    mine, other = object(), object()
    bus.subscribe(TOPIC, cb, obj=mine)

    bus.publish(TOPIC, other)
    bus.publish(TOPIC)
    bus.publish(TOPIC, mine)

    assert [n.object for n in calls] == [mine]


def test_unsubscribe_with_object_only_removes_filtered_registration():
    bus = EventBus()
    calls, cb = make_recorder()
    plane = object()
    bus.subscribe(TOPIC, cb, observer="tower", obj=plane)
    bus.subscribe(TOPIC, cb, observer="tower")

    bus.unsubscribe("tower", TOPIC, plane)
    bus.publish(TOPIC, plane)

    assert len(calls) == 1
    assert bus.subscriber_count(TOPIC) == 1


def test_duplicate_registrations_all_fire_in_order():
    bus = EventBus()
    order = []
    bus.subscribe(TOPIC, lambda n: order.append("first"), observer="tower")
    bus.subscribe(TOPIC, lambda n: order.append("second"), observer="tower")
    bus.subscribe(TOPIC, lambda n: order.append("third"), observer="tower")

    bus.publish(TOPIC)

    assert order == ["first", "second", "third"]
    assert bus.subscriber_count(TOPIC) == 3


def test_subscription_cancel():
    bus = EventBus()
    calls, cb = make_recorder()
    sub = bus.subscribe(TOPIC, cb)

    sub.cancel()
    sub.cancel()        # second cancel is harmless
    bus.publish(TOPIC)

    assert calls == []
    assert sub.active is False


def test_unsubscribe_during_fan_out_skips_removed_callback():
    bus = EventBus()
    calls, cb = make_recorder()

    def first(note):
        bus.unsubscribe("late", TOPIC)

    bus.subscribe(TOPIC, first, observer="early")
    bus.subscribe(TOPIC, cb, observer="late")

    bus.publish(TOPIC)

    assert calls == []


def test_subscribe_during_fan_out_waits_for_next_post():
    bus = EventBus()
    calls, cb = make_recorder()

    def first(note):
        if not calls and bus.subscriber_count(TOPIC) == 1:
            bus.subscribe(TOPIC, cb)

    bus.subscribe(TOPIC, first)
    bus.publish(TOPIC)
    assert calls == []

    bus.publish(TOPIC)
    assert len(calls) == 1


def test_callback_error_propagates_to_poster():
    bus = EventBus()
    calls, cb = make_recorder()

    def boom(note):
        raise RuntimeError("handler broke")

    bus.subscribe(TOPIC, boom)
    bus.subscribe(TOPIC, cb)

    with pytest.raises(RuntimeError, match="handler broke"):
        bus.publish(TOPIC)
    assert calls == []


def test_subscribe_rejects_non_callable():
    bus = EventBus()
    with pytest.raises(TypeError):
        bus.subscribe(TOPIC, "not a function")


def test_clear_drops_everything():
    bus = EventBus()
    calls, cb = make_recorder()
    sub = bus.subscribe(TOPIC, cb)
    bus.subscribe("Airbus.A350.didLand", cb)

    bus.clear()
    bus.publish(TOPIC)

    assert calls == []
    assert bus.topics() == frozenset()
    assert sub.active is False


def test_observers_get_their_own_user_info():
    bus = EventBus()
    calls, cb = make_recorder()
    info = {"k": 1}

    def greedy(note):
        note.user_info.clear()

    bus.subscribe(TOPIC, greedy)
    bus.subscribe(TOPIC, cb)
    bus.publish(TOPIC, user_info=info)

    assert calls[0].user_info == {"k": 1}
    assert info == {"k": 1}
