"""Tests for EventChannel."""

from mediaconf.events import EventChannel


class TestEventChannel:
    def test_publish_reaches_subscribers_in_order(self):
        channel = EventChannel()
        calls = []
        channel.subscribe("saved", lambda topic, payload: calls.append(("first", payload)))
        channel.subscribe("saved", lambda topic, payload: calls.append(("second", payload)))

        delivered = channel.publish("saved", 42)

        assert delivered == 2
        assert calls == [("first", 42), ("second", 42)]

    def test_topics_are_isolated(self):
        channel = EventChannel()
        calls = []
        channel.subscribe("a", lambda topic, payload: calls.append(topic))
        channel.publish("b")
        assert calls == []

    def test_duplicate_subscription_is_ignored(self):
        channel = EventChannel()
        calls = []

        def subscriber(topic, payload):
            calls.append(payload)

        channel.subscribe("saved", subscriber)
        channel.subscribe("saved", subscriber)
        channel.publish("saved", 1)

        assert calls == [1]
        assert channel.subscriber_count("saved") == 1

    def test_unsubscribe_callable(self):
        channel = EventChannel()
        calls = []
        unsubscribe = channel.subscribe("saved", lambda topic, payload: calls.append(payload))

        unsubscribe()
        channel.publish("saved", 1)

        assert calls == []
        assert channel.subscriber_count("saved") == 0

    def test_failing_subscriber_does_not_block_others(self):
        channel = EventChannel()
        calls = []

        def broken(topic, payload):
            raise RuntimeError("boom")

        channel.subscribe("saved", broken)
        channel.subscribe("saved", lambda topic, payload: calls.append(payload))

        delivered = channel.publish("saved", "ok")

        assert delivered == 1
        assert calls == ["ok"]

    def test_clear(self):
        channel = EventChannel()
        channel.subscribe("saved", lambda topic, payload: None)
        channel.clear()
        assert channel.subscriber_count("saved") == 0
        assert channel.publish("saved") == 0
