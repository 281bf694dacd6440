"""Client-side snapshot of a user's home screen settings."""

import logging
from collections.abc import Callable
from typing import Any

from mediaconf.client.api_client import ApiClient
from mediaconf.events import USER_SETTINGS_REFRESH, EventChannel, process_channel
from mediaconf.users.home_sections import get_default_section
from mediaconf.users.types import HOME_SECTION_COUNT

logger = logging.getLogger(__name__)


class UserSettings:
    """Home section values of one user.

    A slot holds None when the user never configured it; reads resolve
    that to the slot default. An explicitly cleared slot reads as "".
    """

    def __init__(self) -> None:
        self.user_id: str | None = None
        self._home_sections: list[str | None] = [None] * HOME_SECTION_COUNT

    async def set_user_info(self, user_id: str, api_client: ApiClient) -> None:
        """Load the user's settings fresh from the server."""
        user = await api_client.get_user(user_id)
        self.user_id = user.id
        self._home_sections = list(user.configuration.home_sections)

    def get_home_section(self, index: int) -> str:
        """Effective section type for slot index, defaults applied."""
        value = self._home_sections[index]
        return get_default_section(index) if value is None else value

    def get_raw_home_section(self, index: int) -> str | None:
        return self._home_sections[index]

    def set_home_sections(self, values: list[str | None]) -> None:
        if len(values) != HOME_SECTION_COUNT:
            raise ValueError(f"Expected {HOME_SECTION_COUNT} home sections, got {len(values)}")
        self._home_sections = list(values)

    def import_from(self, other: "UserSettings") -> None:
        """Copy another instance's state into this one."""
        self.user_id = other.user_id
        self._home_sections = list(other._home_sections)

    def subscribe(self, channel: EventChannel = process_channel) -> Callable[[], None]:
        """Re-import settings whenever a refresh is published on channel.

        Returns:
            A callable that removes the subscription.
        """

        def on_refresh(topic: str, payload: Any) -> None:
            if isinstance(payload, UserSettings) and payload is not self:
                self.import_from(payload)
                logger.debug("User settings refreshed for user '%s'", self.user_id)

        return channel.subscribe(USER_SETTINGS_REFRESH, on_refresh)
