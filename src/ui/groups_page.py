"""Groups page: browse groups for an event, join one, issue tickets."""
import streamlit as st

from src.services.group_service import GroupService
from src.services.repository import InMemoryGroupRepository
from src.ui.components import render_diversity_meter, render_group_card
from src.ui.html_utils import format_currency
from src.utils.exceptions import DiversityGroupsError

FEEDBACK_KEY = "groups_feedback"


def _show_feedback() -> None:
    feedback = st.session_state.pop(FEEDBACK_KEY, None)
    if not feedback:
        return
    success, message = feedback
    if success:
        st.success(message)
    else:
        st.error(message)


def _render_tickets(service: GroupService, group_id: str) -> None:
    tickets = service.get_group_tickets(group_id)
    if not tickets:
        st.caption("No tickets issued yet.")
        return

    st.table([
        {
            "Name": ticket.user_name,
            "Seat": ticket.seat_number,
            "Section": ticket.section,
            "Price": format_currency(ticket.price),
            "Discount": format_currency(ticket.discount_applied),
            "Total": format_currency(ticket.final_price),
        }
        for ticket in tickets
    ])


def render_groups_page(repository: InMemoryGroupRepository) -> None:
    """Render groups for the selected event."""
    service = GroupService(repository)

    events = repository.list_events()
    if not events:
        st.info("No events available")
        return

    event = st.selectbox("Event", events, format_func=lambda e: e.title, key="groups_event")
    users = repository.list_users()
    user = st.selectbox("Join as", users, format_func=lambda u: u.display_name, key="groups_user")

    _show_feedback()

    groups = service.list_event_groups(event.id)
    if not groups:
        st.info("No groups for this event yet")
        return

    for group in groups:
        st.markdown(render_group_card(group), unsafe_allow_html=True)
        st.markdown(render_diversity_meter(group.diversity_score), unsafe_allow_html=True)
        st.caption(", ".join(member.display_name for member in group.members))

        col1, col2 = st.columns(2)
        with col1:
            if st.button("Join group", key=f"join_{group.id}", disabled=group.is_complete):
                st.session_state[FEEDBACK_KEY] = service.try_join_group(group.id, user.id)
                st.rerun()
        with col2:
            if st.button("Issue tickets", key=f"tickets_{group.id}", disabled=not group.members):
                try:
                    tickets = service.issue_group_tickets(group.id)
                    st.session_state[FEEDBACK_KEY] = (True, f"{len(tickets)} tickets ready for {group.name}")
                except DiversityGroupsError as e:
                    st.session_state[FEEDBACK_KEY] = (False, str(e))
                st.rerun()

        with st.expander("Tickets"):
            _render_tickets(service, group.id)
