"""Client-side home screen settings editor.

Usage:
    async with HttpApiClient(server_url) as api:
        await api.authenticate_by_name("alice", "secret")
        settings = HomeScreenSettings(api, api.get_current_user_id())
        await settings.load_data()
        settings.view_order.move_up(view_id)
        settings.latest_items.set_included(folder_id, False)
        await settings.submit()
"""

from mediaconf.client.errors import ApiClientError, SettingsBusyError, SubmitFailure
from mediaconf.client.api_client import ApiClient, HttpApiClient
from mediaconf.client.editors import ExclusionSetEditor, OrderedListEditor
from mediaconf.client.user_settings import UserSettings
from mediaconf.client.pipeline import (
    HomeScreenSettings,
    SettingsForm,
    SettingsState,
)

__all__ = [
    "ApiClient",
    "ApiClientError",
    "ExclusionSetEditor",
    "HomeScreenSettings",
    "HttpApiClient",
    "OrderedListEditor",
    "SettingsBusyError",
    "SettingsForm",
    "SettingsState",
    "SubmitFailure",
    "UserSettings",
]
