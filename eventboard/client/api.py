import logging

import requests

from eventboard.client.state import DraftState, EventItem, build_submission
from eventboard.core.config import EVENTS_API_URL

logger = logging.getLogger(__name__)


class EventsApiError(Exception):
    pass


class EventsClient:
    """Thin wrapper over the events endpoint. Failures raise EventsApiError; nothing is retried."""

    def __init__(self, api_url: str = EVENTS_API_URL, session: requests.Session | None = None):
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        # images are served next to the endpoint: ".../events" -> "..."
        return self.api_url.rsplit("/", 1)[0]

    def image_src(self, url: str) -> str:
        return f"{self.base_url}/{url.lstrip('/')}"

    def _request(self, method: str, failure: str, **kwargs) -> requests.Response:
        try:
            response = self.session.request(method, self.api_url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, self.api_url, e)
            raise EventsApiError(failure) from e

        if not response.ok:
            try:
                message = response.json().get("error")
            except ValueError:
                message = None
            raise EventsApiError(message or "Something went wrong")
        return response

    def list_events(self) -> list[EventItem]:
        response = self._request("GET", "Error fetching events")
        return [EventItem.from_json(item) for item in response.json()]

    def get_event(self, event_id: int) -> EventItem:
        response = self._request("GET", "Error fetching event", params={"id": event_id})
        return EventItem.from_json(response.json())

    def submit(self, state: DraftState) -> EventItem:
        """Create or update, depending on whether the draft is editing an event."""
        data, files = build_submission(state)
        response = self._request("POST", "Request failed", data=data, files=files or None)
        return EventItem.from_json(response.json())

    def delete_event(self, event_id: int) -> None:
        self._request("DELETE", "Delete failed", params={"id": event_id})
