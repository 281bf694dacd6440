"""Home screen settings editor: load, merge and submit.

Submitting runs one pass of a small state machine:

    IDLE --start--> LOADING --loaded--> MERGING --submitted--> SUBMITTED
                       |                   |
                       +------error--------+----> FAILED

The user record is always re-fetched before merging so fields edited
elsewhere since the form was loaded are not overwritten. The merged
configuration is sent in a single update call; on any failure nothing
is sent, or the one call that was sent failed as a whole.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from mediaconf.client.api_client import ApiClient
from mediaconf.client.editors import ExclusionSetEditor, OrderedListEditor
from mediaconf.client.errors import ApiClientError, SettingsBusyError, SubmitFailure
from mediaconf.client.user_settings import UserSettings
from mediaconf.configuration.errors import SchemaMismatchError
from mediaconf.configuration.types import coerce_to_schema
from mediaconf.events import SAVED, USER_SETTINGS_REFRESH, EventChannel, process_channel
from mediaconf.users.home_sections import is_section_type
from mediaconf.users.types import HOME_SECTION_COUNT, UNSET_SECTION, UserConfiguration

logger = logging.getLogger(__name__)


class SettingsState(Enum):
    IDLE = auto()
    LOADING = auto()
    MERGING = auto()
    SUBMITTED = auto()
    FAILED = auto()


class SettingsEvent(Enum):
    START = auto()
    LOADED = auto()
    SUBMITTED = auto()
    ERROR = auto()


_TRANSITIONS = {
    SettingsState.IDLE: {
        SettingsEvent.START: SettingsState.LOADING,
    },
    SettingsState.LOADING: {
        SettingsEvent.LOADED: SettingsState.MERGING,
        SettingsEvent.ERROR: SettingsState.FAILED,
    },
    SettingsState.MERGING: {
        SettingsEvent.SUBMITTED: SettingsState.SUBMITTED,
        SettingsEvent.ERROR: SettingsState.FAILED,
    },
    # A finished pass may be followed by a new, user-initiated one.
    SettingsState.SUBMITTED: {
        SettingsEvent.START: SettingsState.LOADING,
    },
    SettingsState.FAILED: {
        SettingsEvent.START: SettingsState.LOADING,
    },
}

_IN_FLIGHT = (SettingsState.LOADING, SettingsState.MERGING)


@dataclass
class SettingsForm:
    """Scalar form fields.

    home_sections holds the selector value of each slot; "" is an empty
    selection.
    """

    hide_played_in_latest: bool = False
    home_sections: list[str] = field(
        default_factory=lambda: [UNSET_SECTION] * HOME_SECTION_COUNT
    )

    def select_home_section(self, index: int, value: str) -> None:
        """Set selector index (0-based) to a section type id or "".

        Raises:
            ValueError: If value is not a known section type
        """
        if value != UNSET_SECTION and not is_section_type(value):
            raise ValueError(f"Unknown home section type: {value}")
        self.home_sections[index] = value


class HomeScreenSettings:
    """Editor for a user's home screen settings."""

    def __init__(
        self,
        api_client: ApiClient,
        user_id: str,
        user_settings: UserSettings | None = None,
        refresh_channel: EventChannel = process_channel,
    ):
        """Initialize the editor.

        Args:
            api_client: Server operations used to load and submit
            user_id: The user being edited
            user_settings: Settings snapshot to refresh on submit
            refresh_channel: Process channel receiving settings refreshes
        """
        self.api_client = api_client
        self.user_id = user_id
        self.user_settings = user_settings or UserSettings()
        self.events = EventChannel()
        self._refresh_channel = refresh_channel

        self.state = SettingsState.IDLE
        self.loading = False
        self.data_loaded = False
        self.form = SettingsForm()
        self.view_order: OrderedListEditor | None = None
        self.latest_items: ExclusionSetEditor | None = None

    def _transition(self, event: SettingsEvent) -> SettingsState:
        next_state = _TRANSITIONS.get(self.state, {}).get(event)
        if next_state is None:
            raise RuntimeError(f"Invalid settings transition: {self.state} --{event}-->")
        self.state = next_state
        return self.state

    def _fail(self) -> None:
        self._transition(SettingsEvent.ERROR)
        self.loading = False

    def _log_failure(self, message: str, user_id: str, error: Exception) -> None:
        # Transport and schema errors are expected; anything else gets a traceback
        if isinstance(error, (ApiClientError, SchemaMismatchError)):
            logger.warning(message, user_id, error)
        else:
            logger.exception(message, user_id, error)

    async def load_data(self) -> None:
        """Fetch the user, settings and views and build the form and editors.

        Raises:
            ApiClientError: If any fetch fails
        """
        self.loading = True
        try:
            user = await self.api_client.get_user(self.user_id)
            await self.user_settings.set_user_info(self.user_id, self.api_client)
            views = await self.api_client.get_user_views(self.user_id)
        finally:
            self.loading = False

        self.form = SettingsForm(
            hide_played_in_latest=user.configuration.hide_played_in_latest,
            home_sections=[
                self.user_settings.get_home_section(i) for i in range(HOME_SECTION_COUNT)
            ],
        )
        self.view_order = OrderedListEditor(views)
        self.latest_items = ExclusionSetEditor(views, user.configuration.latest_items_excludes)
        self.data_loaded = True

    def _merge(self, current: UserConfiguration) -> UserConfiguration:
        """Apply the form and editors to a freshly fetched configuration."""
        if self.view_order is None or self.latest_items is None:
            raise RuntimeError("load_data() must complete before merging")

        data = current.model_dump()
        data.update(
            hide_played_in_latest=self.form.hide_played_in_latest,
            latest_items_excludes=self.latest_items.excluded_ids(),
            ordered_views=self.view_order.ordered_ids(),
            home_sections=[value or UNSET_SECTION for value in self.form.home_sections],
        )
        return coerce_to_schema(UserConfiguration, data)

    async def submit(self) -> UserConfiguration:
        """Merge local edits into the current user record and submit it.

        Returns:
            The configuration that was submitted

        Raises:
            SettingsBusyError: If a submit is already in flight
            RuntimeError: If load_data() has not completed
            SubmitFailure: If loading or submitting fails (state is FAILED)
        """
        if self.state in _IN_FLIGHT:
            raise SettingsBusyError("A settings submit is already in progress")
        if not self.data_loaded:
            raise RuntimeError("load_data() must complete before submit()")

        self._transition(SettingsEvent.START)
        self.loading = True

        try:
            await self.user_settings.set_user_info(self.user_id, self.api_client)
            user = await self.api_client.get_user(self.user_id)
        except Exception as e:
            self._fail()
            self._log_failure("Loading user '%s' for submit failed: %s", self.user_id, e)
            raise SubmitFailure(f"Could not load user '{self.user_id}': {e}") from e

        self._transition(SettingsEvent.LOADED)

        try:
            configuration = self._merge(user.configuration)
            await self.api_client.update_user_configuration(user.id, configuration)
        except Exception as e:
            self._fail()
            self._log_failure("Submitting settings for user '%s' failed: %s", user.id, e)
            raise SubmitFailure(f"Could not save settings for '{user.id}': {e}") from e

        self._transition(SettingsEvent.SUBMITTED)
        self.loading = False

        self.user_settings.set_home_sections(configuration.home_sections)
        if user.id == self.api_client.get_current_user_id():
            self._refresh_channel.publish(USER_SETTINGS_REFRESH, self.user_settings)
        self.events.publish(SAVED, configuration)
        return configuration
