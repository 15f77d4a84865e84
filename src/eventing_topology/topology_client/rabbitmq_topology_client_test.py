"""Tests for RabbitMQTopologyClient."""

import threading
from unittest.mock import Mock

import pika
import pytest

from eventing_topology.binding import BindingArgs, BindingRequest
from eventing_topology.contracts import IRabbitMQConnection, ITopologyClient
from eventing_topology.errors import (
    BindingCancelledError,
    BindingConnectionError,
    BindingNotFoundError,
    BindingTimeoutError,
    InvalidBindingArgsError,
    OperationCancelledError,
    OperationTimeoutError,
)
from eventing_topology.identity import Identity
from eventing_topology.resources import Broker, Trigger
from eventing_topology.topology_client import (
    RabbitMQTopologyClient,
    TopologyClientConfig,
    TopologyClientDependencies,
    declare_dead_letter_binding,
    declare_trigger_binding,
)


@pytest.fixture
def channel():
    return Mock()


@pytest.fixture
def mock_connection(channel):
    connection = Mock(spec=IRabbitMQConnection)
    connection.run.side_effect = lambda operation, timeout=None: operation(channel)
    return connection


@pytest.fixture
def connection_factory(mock_connection):
    return Mock(return_value=mock_connection)


@pytest.fixture
def client(connection_factory):
    return RabbitMQTopologyClient(
        config=TopologyClientConfig(connect_timeout=2.0, declare_timeout=4.0),
        dependencies=TopologyClientDependencies(make_connection=connection_factory),
    )


@pytest.fixture
def binding_request():
    return BindingRequest(
        source="b.ns.some-broker.broker-uid",
        destination="t.ns.queue-and-a.trigger-uid",
        routing_key="some-key",
        arguments={"x-match": "all", "x-knative-trigger": "queue-and-a"},
    )


def test_declare_binding_issues_queue_bind(
    client, connection_factory, mock_connection, channel, binding_request
):
    cancel = threading.Event()

    client.declare_binding(binding_request, broker_url="amqp://localhost", cancel_event=cancel)

    connection_factory.assert_called_once_with("amqp://localhost", 2.0, cancel)
    assert mock_connection.run.call_args.kwargs["timeout"] == 4.0
    channel.queue_bind.assert_called_once_with(
        queue="t.ns.queue-and-a.trigger-uid",
        exchange="b.ns.some-broker.broker-uid",
        routing_key="some-key",
        arguments={"x-match": "all", "x-knative-trigger": "queue-and-a"},
    )


def test_declare_binding_falls_back_to_configured_url(connection_factory, binding_request):
    client = RabbitMQTopologyClient(
        config=TopologyClientConfig(broker_url="amqp://configured"),
        dependencies=TopologyClientDependencies(make_connection=connection_factory),
    )

    client.declare_binding(binding_request, broker_url="")

    assert connection_factory.call_args.args[0] == "amqp://configured"


def test_declare_binding_is_repeatable(client, channel, binding_request):
    client.declare_binding(binding_request, broker_url="amqp://localhost")
    client.declare_binding(binding_request, broker_url="amqp://localhost")

    assert channel.queue_bind.call_count == 2
    first, second = channel.queue_bind.call_args_list
    assert first == second


def test_declare_binding_wraps_not_found(client, channel, binding_request):
    channel.queue_bind.side_effect = pika.exceptions.ChannelClosedByBroker(
        404, "NOT_FOUND - no exchange 'b.ns.some-broker.broker-uid' in vhost '/'"
    )

    with pytest.raises(BindingNotFoundError) as excinfo:
        client.declare_binding(binding_request, broker_url="amqp://localhost")

    assert str(excinfo.value).startswith("failed to declare binding: ")
    assert "no exchange 'b.ns.some-broker.broker-uid'" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, pika.exceptions.ChannelClosedByBroker)


def test_declare_binding_wraps_connection_failure(client, mock_connection, binding_request):
    mock_connection.run.side_effect = pika.exceptions.AMQPConnectionError("refused")

    with pytest.raises(BindingConnectionError, match="failed to declare binding: "):
        client.declare_binding(binding_request, broker_url="amqp://localhost")


def test_declare_binding_wraps_timeout(client, mock_connection, binding_request):
    mock_connection.run.side_effect = OperationTimeoutError("too slow")

    with pytest.raises(BindingTimeoutError):
        client.declare_binding(binding_request, broker_url="amqp://localhost")


def test_declare_binding_wraps_cancellation(client, mock_connection, binding_request):
    mock_connection.run.side_effect = OperationCancelledError("stop")

    with pytest.raises(BindingCancelledError):
        client.declare_binding(binding_request, broker_url="amqp://localhost")


def test_declare_trigger_binding_builds_and_declares():
    client = Mock(spec=ITopologyClient)
    cancel = threading.Event()
    args = BindingArgs(
        routing_key="some-key",
        broker_url="amqp://localhost",
        broker=Broker(Identity("ns", "some-broker", "broker-uid")),
        trigger=Trigger(Identity("ns", "queue-and-a", "trigger-uid"), attributes={}),
    )

    request = declare_trigger_binding(args, client=client, cancel_event=cancel)

    client.declare_binding.assert_called_once_with(
        request, broker_url="amqp://localhost", cancel_event=cancel
    )
    assert request.destination == "t.ns.queue-and-a.trigger-uid"


def test_declare_dead_letter_binding_builds_and_declares():
    client = Mock(spec=ITopologyClient)
    args = BindingArgs(
        broker_url="amqp://localhost",
        broker=Broker(Identity("ns", "some-broker", "broker-uid")),
        queue_name="dlq",
    )

    request = declare_dead_letter_binding(args, client=client)

    client.declare_binding.assert_called_once()
    assert request.source == "b.ns.some-broker.dlx.broker-uid"


def test_invalid_args_never_reach_the_broker():
    client = Mock(spec=ITopologyClient)

    with pytest.raises(InvalidBindingArgsError):
        declare_trigger_binding(BindingArgs(broker_url="amqp://localhost"), client=client)

    client.declare_binding.assert_not_called()


def test_from_env_reads_config(monkeypatch):
    monkeypatch.setenv("RABBITMQ_URL", "amqp://env")
    monkeypatch.setenv("TOPOLOGY_DECLARE_TIMEOUT", "7")

    client = RabbitMQTopologyClient.from_env()

    assert client.config.broker_url == "amqp://env"
    assert client.config.declare_timeout == 7.0
