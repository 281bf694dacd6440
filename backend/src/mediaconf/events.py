"""Process-scoped event channel.

Consumers subscribe to a topic at initialization and unsubscribe at
teardown. Publishing is synchronous: every subscriber runs in
subscription order before publish() returns.

Topics used by mediaconf:
- configuration.updated: the application configuration was replaced
- named_configuration.updated: a named configuration was saved
- user_settings.refresh: a user's settings were saved and should be
  re-imported by in-memory consumers
- saved: a settings editor finished submitting
"""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

# Subscriber signature: (topic, payload) -> None
Subscriber = Callable[[str, Any], None]

CONFIGURATION_UPDATED = "configuration.updated"
NAMED_CONFIGURATION_UPDATED = "named_configuration.updated"
USER_SETTINGS_REFRESH = "user_settings.refresh"
SAVED = "saved"


class EventChannel:
    """Topic-based publish/subscribe channel."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = {}

    def subscribe(self, topic: str, subscriber: Subscriber) -> Callable[[], None]:
        """Subscribe to a topic.

        Subscribing the same callable twice to one topic is a no-op.

        Returns:
            A callable that removes the subscription.
        """
        subscribers = self._subscribers.setdefault(topic, [])
        if subscriber not in subscribers:
            subscribers.append(subscriber)
        return lambda: self.unsubscribe(topic, subscriber)

    def unsubscribe(self, topic: str, subscriber: Subscriber) -> None:
        subscribers = self._subscribers.get(topic, [])
        if subscriber in subscribers:
            subscribers.remove(subscriber)

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))

    def publish(self, topic: str, payload: Any = None) -> int:
        """Deliver payload to every subscriber of topic.

        A failing subscriber is logged and skipped so the remaining
        subscribers still observe the event.

        Returns:
            Number of subscribers that handled the event without error.
        """
        delivered = 0
        for subscriber in list(self._subscribers.get(topic, [])):
            try:
                subscriber(topic, payload)
            except Exception as e:
                logger.error("Subscriber for '%s' failed: %s", topic, e)
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        """Drop all subscriptions. Primarily for testing."""
        self._subscribers.clear()


# Process-wide channel shared by the server and client halves.
process_channel = EventChannel()
