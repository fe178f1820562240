"""
Test the page callbacks without rendering the page.
"""
from unittest.mock import Mock

import pytest

from eventboard.client import ui
from eventboard.client.api import EventsApiError, EventsClient
from eventboard.client.state import DraftState, EventItem

STORED = EventItem(id=3, title="Launch", description="Fresh", date="2025-01-10", url="event-image/img_1.png")


class SessionState(dict):
    """Dict with attribute access, like streamlit's session state."""

    def __getattr__(self, name):
        return self[name]

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def api() -> Mock:
    return Mock(spec=EventsClient)


@pytest.fixture
def session_state(monkeypatch, api: Mock) -> SessionState:
    state = SessionState(client=api)
    monkeypatch.setattr(ui.st, "session_state", state)
    ui.init_state()
    return state


class TestEditCallback:
    """Test starting an edit from the list."""

    def test_edit_loads_current_event(self, session_state: SessionState, api: Mock):
        ui.on_edit(3)

        api.get_event.assert_called_once_with(3)
        assert session_state.draft.editing_id == 3
        assert session_state.draft.form.description == "Fresh"
        assert session_state.draft.form.image_url == "event-image/img_1.png"
        assert session_state.form_version == 1

    def test_edit_of_vanished_event(self, session_state: SessionState, api: Mock):
        api.get_event.side_effect = EventsApiError("Event not found")
        api.list_events.return_value = []

        ui.on_edit(3)

        assert session_state.alert == "Event not found"
        assert session_state.draft == DraftState()
        assert session_state.events == []

    @pytest.fixture(autouse=True)
    def stored_event(self, api: Mock):
        api.get_event.return_value = STORED
