"""Tests for binding request construction."""

import pytest

from eventing_topology.arguments import BINDING_KEY, OWNER_KEYS, TRIGGER_DLQ_BINDING_KEY
from eventing_topology.binding import (
    BindingArgs,
    BrokerTarget,
    TriggerTarget,
    dead_letter_target_for,
    make_binding,
    make_dlq_binding,
)
from eventing_topology.errors import InvalidBindingArgsError
from eventing_topology.identity import Identity
from eventing_topology.resources import Broker, Trigger


@pytest.fixture
def broker():
    return Broker(Identity(namespace="ns", name="some-broker", uid="broker-uid"))


@pytest.fixture
def trigger():
    return Trigger(
        Identity(namespace="ns", name="queue-and-a", uid="trigger-uid"),
        broker="some-broker",
        attributes={},
    )


def test_make_binding_resolves_names(broker, trigger):
    request = make_binding(BindingArgs(routing_key="some-key", broker=broker, trigger=trigger))

    assert request.source == "b.ns.some-broker.broker-uid"
    assert request.destination == "t.ns.queue-and-a.trigger-uid"
    assert request.destination_type == "queue"
    assert request.routing_key == "some-key"
    assert request.arguments == {"x-match": "all", BINDING_KEY: "queue-and-a"}
    assert request.owner == (BINDING_KEY, "queue-and-a")


def test_make_binding_ignores_queue_override(broker, trigger):
    request = make_binding(BindingArgs(broker=broker, trigger=trigger, queue_name="other"))

    assert request.destination == "t.ns.queue-and-a.trigger-uid"


def test_make_binding_includes_filter(broker):
    trigger = Trigger(
        Identity(namespace="ns", name="orders", uid="u1"),
        attributes={"type": "order.created"},
    )

    request = make_binding(BindingArgs(broker=broker, trigger=trigger))

    assert request.arguments["type"] == "order.created"
    assert [key for key in request.arguments if key in OWNER_KEYS] == [BINDING_KEY]


def test_make_binding_requires_broker(trigger):
    with pytest.raises(InvalidBindingArgsError, match="broker"):
        make_binding(BindingArgs(trigger=trigger))


def test_make_binding_requires_trigger(broker):
    with pytest.raises(InvalidBindingArgsError, match="trigger"):
        make_binding(BindingArgs(broker=broker))


def test_make_binding_requires_filter(broker):
    trigger = Trigger(Identity(namespace="ns", name="t", uid="u"), attributes=None)

    with pytest.raises(InvalidBindingArgsError, match="filter"):
        make_binding(BindingArgs(broker=broker, trigger=trigger))


def test_make_binding_rejects_incomplete_identity(broker):
    trigger = Trigger(Identity(namespace="ns", name="t"), attributes={})

    with pytest.raises(InvalidBindingArgsError, match="uid"):
        make_binding(BindingArgs(broker=broker, trigger=trigger))


def test_make_binding_rejects_foreign_broker(broker):
    trigger = Trigger(
        Identity(namespace="ns", name="t", uid="u"), broker="other-broker", attributes={}
    )

    with pytest.raises(InvalidBindingArgsError, match="other-broker"):
        make_binding(BindingArgs(broker=broker, trigger=trigger))


def test_make_dlq_binding_for_trigger(broker):
    trigger = Trigger(Identity(namespace="ns", name="some-broker", uid="trigger-uid"))

    request = make_dlq_binding(
        BindingArgs(broker=broker, trigger=trigger, queue_name="queue-and-a")
    )

    assert request.source == "t.ns.some-broker.dlx.trigger-uid"
    assert request.destination == "queue-and-a"
    assert request.arguments == {"x-match": "all", TRIGGER_DLQ_BINDING_KEY: "some-broker"}


def test_make_dlq_binding_for_broker():
    broker = Broker(Identity(namespace="ns", name="some-broker", uid="broker-test-uid"))

    request = make_dlq_binding(BindingArgs(broker=broker, queue_name="queue-and-a"))

    assert request.source == "b.ns.some-broker.dlx.broker-test-uid"
    assert request.destination == "queue-and-a"
    assert request.arguments == {"x-match": "all", BINDING_KEY: "some-broker"}


def test_make_dlq_binding_empty_trigger_identity_selects_broker(broker):
    request = make_dlq_binding(
        BindingArgs(broker=broker, trigger=Trigger(Identity()), queue_name="dlq")
    )

    assert request.source == "b.ns.some-broker.dlx.broker-uid"


def test_make_dlq_binding_explicit_target_wins(broker, trigger):
    request = make_dlq_binding(
        BindingArgs(
            broker=broker,
            trigger=trigger,
            queue_name="dlq",
            dead_letter_target=BrokerTarget(broker),
        )
    )

    assert request.source == "b.ns.some-broker.dlx.broker-uid"
    assert request.owner == (BINDING_KEY, "some-broker")


def test_make_dlq_binding_requires_queue_name(broker):
    with pytest.raises(InvalidBindingArgsError, match="queue"):
        make_dlq_binding(BindingArgs(broker=broker))


def test_make_dlq_binding_excludes_filter(broker):
    trigger = Trigger(
        Identity(namespace="ns", name="t", uid="u"), attributes={"type": "order.created"}
    )

    request = make_dlq_binding(BindingArgs(trigger=trigger, queue_name="dlq"))

    assert "type" not in request.arguments


def test_dead_letter_target_for_partial_trigger_rejected(broker):
    partial = Trigger(Identity(name="t"))

    with pytest.raises(InvalidBindingArgsError, match="trigger"):
        dead_letter_target_for(broker, partial)


def test_dead_letter_target_for_requires_broker_without_trigger():
    with pytest.raises(InvalidBindingArgsError, match="broker"):
        dead_letter_target_for(None, None)


def test_dead_letter_target_for_selects_variant(broker, trigger):
    assert dead_letter_target_for(broker, trigger) == TriggerTarget(trigger)
    assert dead_letter_target_for(broker, None) == BrokerTarget(broker)
