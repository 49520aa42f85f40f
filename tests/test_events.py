# Event Bus Tests
"""Tests for per-stage channels and aggregated subscriptions."""

import logging

import pytest

from courier.events import EventBus, PipelineEvent, Stage


class TestChannels:
    """Test per-stage subscription and delivery."""

    def test_one_channel_per_stage(self, bus):
        assert bus.channel(Stage.DELEGATE) is bus.on_delegate
        assert bus.channel("transport_call") is bus.on_transport_call
        assert bus.channel(Stage.ERROR) is bus.on_error

    def test_subscribers_receive_info_and_value(self, bus, info):
        received = []
        bus.subscribe(Stage.REQUEST, lambda i, v: received.append((i, v)))

        bus.publish(Stage.REQUEST, info, {"id": 7})

        assert received == [(info, {"id": 7})]

    def test_delivery_follows_subscription_order(self, bus, info):
        order = []
        bus.subscribe(Stage.CONTENT, lambda i, v: order.append("first"))
        bus.subscribe(Stage.CONTENT, lambda i, v: order.append("second"))

        bus.publish(Stage.CONTENT, info, "x")

        assert order == ["first", "second"]

    def test_other_stages_not_notified(self, bus, info):
        received = []
        bus.on_response.subscribe(lambda i, v: received.append(v))

        bus.publish(Stage.CONTENT, info, "x")

        assert received == []

    def test_subscribe_is_chainable(self, bus, info):
        received = []
        (
            bus
            .subscribe(Stage.REQUEST, lambda i, v: received.append("request"))
            .subscribe(Stage.RESPONSE, lambda i, v: received.append("response"))
        )

        bus.publish(Stage.REQUEST, info, None)
        bus.publish(Stage.RESPONSE, info, None)

        assert received == ["request", "response"]

    def test_unsubscribe(self, bus, info):
        received = []

        def callback(i, v):
            received.append(v)

        bus.subscribe(Stage.CONTENT, callback)
        bus.unsubscribe(Stage.CONTENT, callback)
        bus.publish(Stage.CONTENT, info, "x")

        assert received == []
        assert len(bus.on_content) == 0

    def test_failing_subscriber_is_isolated(self, bus, info, caplog):
        received = []

        def broken(i, v):
            raise ValueError("boom")

        bus.subscribe(Stage.CONTENT, broken)
        bus.subscribe(Stage.CONTENT, lambda i, v: received.append(v))

        with caplog.at_level(logging.ERROR, logger="courier.events"):
            bus.publish(Stage.CONTENT, info, "x")

        assert received == ["x"]
        assert "failed on content" in caplog.text


class TestAggregatedSubscription:
    """Test subscribe_all."""

    def test_receives_every_stage(self, bus, info):
        events = []
        bus.subscribe_all(events.append)

        for stage in Stage:
            bus.publish(stage, info, stage.value)

        assert [e.stage for e in events] == list(Stage)
        assert all(isinstance(e, PipelineEvent) and e.info is info for e in events)

    def test_runs_after_stage_subscribers(self, bus, info):
        order = []
        bus.subscribe_all(lambda event: order.append("all"))
        bus.subscribe(Stage.REQUEST, lambda i, v: order.append("stage"))

        bus.publish(Stage.REQUEST, info, None)

        assert order == ["stage", "all"]

    def test_failing_aggregated_subscriber_is_isolated(self, bus, info):
        events = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe_all(broken)
        bus.subscribe_all(events.append)

        bus.publish(Stage.DELEGATE, info, None)

        assert len(events) == 1

    def test_unsubscribe_all(self, bus, info):
        events = []
        bus.subscribe_all(events.append)
        bus.unsubscribe_all(events.append)

        bus.publish(Stage.DELEGATE, info, None)

        assert events == []

    def test_unknown_stage_rejected(self, info):
        with pytest.raises(ValueError):
            EventBus().publish("not_a_stage", info, None)
