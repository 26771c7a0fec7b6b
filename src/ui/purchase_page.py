"""Ticket purchase page: attendee details, diversity meter and invoice."""
from typing import List, Optional

import streamlit as st

from src.models.event import Event
from src.models.person import Person
from src.services.attendee_service import (
    add_attendee,
    new_attendee_list,
    remove_attendee,
    update_attendee,
)
from src.services.diversity_service import compute_diversity_index, dimension_scores
from src.services.pricing_service import quote_by_diversity, quote_by_group_size
from src.services.repository import InMemoryGroupRepository
from src.ui.components import DIMENSION_LABELS, quote_rows, render_diversity_meter
from src.utils.exceptions import InvalidInputError
from src.utils.validation import validate_name

ATTENDEES_KEY = "purchase_attendees"
SCHEME_OPTIONS = {
    "Diversity index": "diversity",
    "Group size": "group_size",
}
GENDER_OPTIONS = ["", "Female", "Male", "Non-binary", "Prefer not to say"]


def _get_attendees() -> List[Person]:
    if ATTENDEES_KEY not in st.session_state:
        st.session_state[ATTENDEES_KEY] = new_attendee_list()
    return st.session_state[ATTENDEES_KEY]


def _set_attendees(attendees: List[Person]) -> None:
    st.session_state[ATTENDEES_KEY] = attendees


def _blank_to_none(value: str) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _name_error(name: str) -> Optional[str]:
    """Error message for a typed attendee name; blank names are allowed."""
    if not name or not name.strip():
        return None
    is_valid, message = validate_name(name)
    return None if is_valid else message


def _render_attendee_form(index: int, attendee: Person) -> None:
    """Render editable fields for one attendee and store any change."""
    key = f"attendee_{attendee.id}"
    title = "You" if index == 0 else f"Attendee {index + 1}"

    with st.expander(f"{title}: {attendee.display_name}", expanded=index == 0):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name", value=attendee.name or "", key=f"{key}_name")
            age = st.number_input(
                "Age", min_value=0, max_value=120, value=attendee.age, step=1, key=f"{key}_age"
            )
            gender = st.selectbox(
                "Gender",
                GENDER_OPTIONS,
                index=GENDER_OPTIONS.index(attendee.gender) if attendee.gender in GENDER_OPTIONS else 0,
                key=f"{key}_gender",
            )
            state = st.text_input("State", value=attendee.state or "", key=f"{key}_state")
        with col2:
            country = st.text_input(
                "Country of birth", value=attendee.country_of_birth or "", key=f"{key}_country"
            )
            language = st.text_input(
                "Language at home", value=attendee.language_at_home or "", key=f"{key}_language"
            )
            first_nations = st.checkbox(
                "Aboriginal or Torres Strait Islander", value=attendee.is_first_nations, key=f"{key}_fn"
            )
            disability = st.checkbox("Has disability", value=attendee.has_disability, key=f"{key}_dis")

        name_error = _name_error(name)
        if name_error:
            st.error(name_error)
            return

        try:
            updated = Person(
                id=attendee.id,
                name=_blank_to_none(name),
                age=int(age) if age is not None else None,
                gender=_blank_to_none(gender),
                country_of_birth=_blank_to_none(country),
                language_at_home=_blank_to_none(language),
                state=_blank_to_none(state),
                is_first_nations=first_nations,
                has_disability=disability,
            )
        except InvalidInputError as e:
            st.error(str(e))
            return

        if updated != attendee:
            _set_attendees(update_attendee(_get_attendees(), index, updated))

        if index > 0 and st.button("Remove", key=f"{key}_remove"):
            _set_attendees(remove_attendee(_get_attendees(), index, keep_first=True))
            st.rerun()


def _render_breakdown(attendees: List[Person]) -> None:
    scores = dimension_scores(attendees)
    if not scores:
        st.caption("Add at least two attendees to see a diversity breakdown.")
        return

    for name, value in scores.items():
        st.progress(value, text=f"{DIMENSION_LABELS[name]}: {int(round(value * 100))}%")


def render_purchase_page(repository: InMemoryGroupRepository) -> None:
    """Render the purchase flow for one event."""
    events: List[Event] = repository.list_events()
    if not events:
        st.info("No events available")
        return

    event = st.selectbox("Event", events, format_func=lambda e: e.title, key="purchase_event")
    st.caption(f"{event.venue or event.city} · {event.date}")

    attendees = _get_attendees()
    for index, attendee in enumerate(attendees):
        _render_attendee_form(index, attendee)

    if st.button("➕ Add attendee", key="purchase_add"):
        _set_attendees(add_attendee(_get_attendees()))
        st.rerun()

    attendees = _get_attendees()
    score = compute_diversity_index(attendees)
    st.markdown(render_diversity_meter(score), unsafe_allow_html=True)
    _render_breakdown(attendees)

    scheme_label = st.radio("Discount scheme", list(SCHEME_OPTIONS), horizontal=True, key="purchase_scheme")
    if SCHEME_OPTIONS[scheme_label] == "diversity":
        quote = quote_by_diversity(event, attendees)
    else:
        quote = quote_by_group_size(event, attendees)

    for label, amount in quote_rows(quote).items():
        col1, col2 = st.columns([3, 1])
        col1.write(label)
        col2.write(amount)

    if st.button("Confirm purchase", type="primary", disabled=not attendees, key="purchase_confirm"):
        st.success(f"Purchased {quote.attendee_count} tickets for {event.title}")
