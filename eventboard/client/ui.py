"""
Event management page.

Run with ``streamlit run eventboard/client/ui.py``; the API location comes from
``EVENTS_API_URL``.
"""
from datetime import date

import streamlit as st

from eventboard.client.api import EventsApiError, EventsClient
from eventboard.client.state import (
    Action,
    DraftState,
    EditStarted,
    EventItem,
    FieldChanged,
    FileChosen,
    FormReset,
    ImageCleared,
    ImageFile,
    missing_fields,
    reduce,
)

# actions after which the input widgets must be rebuilt from the draft
REBUILD_ACTIONS = (EditStarted, FormReset, ImageCleared)


def init_state():
    st.session_state.setdefault("client", EventsClient())
    st.session_state.setdefault("draft", DraftState())
    st.session_state.setdefault("events", None)
    st.session_state.setdefault("form_version", 0)
    st.session_state.setdefault("pending_delete", None)
    st.session_state.setdefault("alert", None)


def client() -> EventsClient:
    return st.session_state.client


def draft() -> DraftState:
    return st.session_state.draft


def dispatch(action: Action):
    st.session_state.draft = reduce(st.session_state.draft, action)
    if isinstance(action, REBUILD_ACTIONS):
        st.session_state.form_version += 1


def alert(message: str):
    st.session_state.alert = message


def widget_key(name: str) -> str:
    return f"{name}_{st.session_state.form_version}"


# ---------- callbacks ----------
def on_text_change(name: str):
    dispatch(FieldChanged(name, st.session_state[widget_key(name)]))


def on_date_change():
    value = st.session_state[widget_key("date")]
    dispatch(FieldChanged("date", value.isoformat() if value else ""))


def on_file_change():
    uploaded = st.session_state[widget_key("image")]
    if uploaded is None:
        dispatch(FileChosen(None))
        return
    image = ImageFile(uploaded.name, uploaded.getvalue(), uploaded.type or "application/octet-stream")
    dispatch(FileChosen(image))


def refresh_events():
    try:
        st.session_state.events = client().list_events()
    except EventsApiError as e:
        st.session_state.events = st.session_state.events or []
        alert(str(e))


def on_submit():
    if missing_fields(draft()):
        alert("Title and Date are required")
        return
    try:
        client().submit(draft())
    except EventsApiError as e:
        alert(str(e))
        return
    dispatch(FormReset())
    refresh_events()


def on_confirm_delete(event_id: int):
    st.session_state.pending_delete = None
    try:
        client().delete_event(event_id)
    except EventsApiError as e:
        alert(str(e))
        return
    if draft().editing_id == event_id:
        dispatch(FormReset())
    refresh_events()


def on_edit(event_id: int):
    # edit what the server holds now, not the possibly stale list entry
    try:
        event = client().get_event(event_id)
    except EventsApiError as e:
        alert(str(e))
        refresh_events()
        return
    dispatch(EditStarted(event))


def on_ask_delete(event_id: int):
    st.session_state.pending_delete = event_id


def on_cancel_delete():
    st.session_state.pending_delete = None


# ---------- rendering ----------
def parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def render_form():
    form = draft().form
    st.text_input("Title", value=form.title, key=widget_key("title"), on_change=on_text_change, args=("title",))
    st.text_area(
        "Description",
        value=form.description,
        key=widget_key("description"),
        on_change=on_text_change,
        args=("description",),
    )
    st.date_input("Date", value=parse_date(form.date), key=widget_key("date"), on_change=on_date_change)

    if form.image_url and form.image is None:
        st.image(client().image_src(form.image_url), caption="Current", width=240)
        st.button("Remove Image", on_click=dispatch, args=(ImageCleared(),))

    st.file_uploader(
        "Image",
        type=["png", "jpg", "jpeg", "gif", "webp"],
        key=widget_key("image"),
        on_change=on_file_change,
    )

    cols = st.columns([1, 1, 4])
    cols[0].button("Update Event" if draft().is_editing else "Add Event", type="primary", on_click=on_submit)
    if draft().is_editing:
        cols[1].button("Cancel", on_click=dispatch, args=(FormReset(),))


def render_event(event: EventItem):
    st.markdown(f"**{event.title}** - *{event.date}*")
    if event.description:
        st.write(event.description)
    if event.url:
        st.image(client().image_src(event.url), caption=event.title, width=320)

    if st.session_state.pending_delete == event.id:
        st.warning("Are you sure you want to delete this event?")
        cols = st.columns([1, 1, 4])
        cols[0].button("Yes, delete", key=f"confirm_{event.id}", on_click=on_confirm_delete, args=(event.id,))
        cols[1].button("No", key=f"keep_{event.id}", on_click=on_cancel_delete)
    else:
        cols = st.columns([1, 1, 4])
        cols[0].button("Edit", key=f"edit_{event.id}", on_click=on_edit, args=(event.id,))
        cols[1].button("Delete", key=f"delete_{event.id}", on_click=on_ask_delete, args=(event.id,))
    st.divider()


def main():
    st.set_page_config(page_title="Event Management")
    init_state()
    st.title("Event Management")

    if st.session_state.alert:
        st.error(st.session_state.alert)
        st.session_state.alert = None

    render_form()

    if st.session_state.events is None:
        with st.spinner("Loading events..."):
            refresh_events()
        if st.session_state.alert:
            st.error(st.session_state.alert)
            st.session_state.alert = None

    for event in st.session_state.events:
        render_event(event)


if __name__ == "__main__":
    main()
