"""Unit tests for group_service."""
from unittest.mock import patch

import pytest

from src.models.event import Event
from src.models.person import Person
from src.services.group_service import (
    GroupService,
    available_spots,
    create_group,
    generate_seat_assignments,
    join_group,
)
from src.utils.exceptions import (
    CapacityExceededError,
    DuplicateMemberError,
    EventNotFoundError,
    GroupFullError,
    GroupNotFoundError,
    InvalidInputError,
    UserNotFoundError,
)
from src.utils.settings import SeatSettings

DEFAULT_SEATS = SeatSettings(base=20, row="12", section="Section A")


@pytest.fixture
def full_group(mei, priya):
    return create_group("evt_afl", "Pair", [mei, priya], max_members=2)


@pytest.fixture
def service(repository):
    return GroupService(repository)


class TestCreateGroup:
    """Test create_group function."""

    def test_create_with_members(self, four_attendees):
        group = create_group("evt_afl", "Diversity Champions", four_attendees, 6)

        assert group.event_id == "evt_afl"
        assert group.diversity_score == 48
        assert group.discount_rate == 0.25
        assert available_spots(group) == 2

    def test_create_empty(self):
        group = create_group("evt_afl", "New crew", [], 4)

        assert group.members == []
        assert available_spots(group) == 4

    def test_explicit_group_id(self):
        group = create_group("evt_afl", "New crew", [], 4, group_id="grp_1")

        assert group.id == "grp_1"

    def test_too_many_initial_members(self, four_attendees):
        with pytest.raises(CapacityExceededError):
            create_group("evt_afl", "Crew", four_attendees, 2)


class TestJoinGroup:
    """Test join_group function."""

    def test_join_appends_in_order(self, mei, priya, james):
        group = create_group("evt_afl", "Crew", [mei, priya], 4)

        join_group(group, james)

        assert group.member_ids() == ["user_mei", "user_priya", "user_james"]
        assert group.discount_rate == 0.25
        assert available_spots(group) == 1

    def test_join_recomputes_score(self, mei, priya, fatima, james):
        group = create_group("evt_afl", "Crew", [mei, priya, fatima], 4)
        before = group.diversity_score

        join_group(group, james)

        assert group.diversity_score == 48
        assert group.diversity_score != before
        assert group.is_complete is True

    def test_join_full_group_leaves_group_unchanged(self, full_group, james):
        score = full_group.diversity_score
        rate = full_group.discount_rate

        with pytest.raises(GroupFullError):
            join_group(full_group, james)

        assert full_group.member_ids() == ["user_mei", "user_priya"]
        assert full_group.diversity_score == score
        assert full_group.discount_rate == rate
        assert full_group.is_complete is True

    def test_duplicate_member(self, mei):
        group = create_group("evt_afl", "Crew", [mei], 4)

        with pytest.raises(DuplicateMemberError):
            join_group(group, Person(id="user_mei"))

        assert len(group.members) == 1


class TestGenerateSeatAssignments:
    """Test generate_seat_assignments function."""

    def test_one_ticket_per_member(self, afl_event, mei, priya, james):
        group = create_group("evt_afl", "Crew", [mei, priya, james], 4)

        tickets = generate_seat_assignments(group, afl_event, seat_base=20, row="12", section="Section A")

        assert [t.user_id for t in tickets] == ["user_mei", "user_priya", "user_james"]
        assert [t.seat_number for t in tickets] == [
            "Row 12, Seat 20",
            "Row 12, Seat 21",
            "Row 12, Seat 22",
        ]
        assert {t.section for t in tickets} == {"Section A"}

    def test_prices_apply_group_discount(self, afl_event, mei, priya, james):
        group = create_group("evt_afl", "Crew", [mei, priya, james], 4)

        ticket = generate_seat_assignments(group, afl_event, seat_base=1)[0]

        assert ticket.price == 60.0
        assert ticket.discount_applied == pytest.approx(15.0)
        assert ticket.final_price == pytest.approx(45.0)
        assert ticket.user_name == "Mei Chen"
        assert ticket.event_title == afl_event.title

    def test_defaults_come_from_settings(self, afl_event, mei):
        group = create_group("evt_afl", "Crew", [mei], 4)

        with patch("src.services.group_service.get_seat_settings",
                   return_value=SeatSettings(base=5, row="B", section="North")):
            tickets = generate_seat_assignments(group, afl_event)

        assert tickets[0].seat_number == "Row B, Seat 5"
        assert tickets[0].section == "North"

    def test_explicit_arguments_skip_settings(self, afl_event, mei):
        group = create_group("evt_afl", "Crew", [mei], 4)

        with patch("src.services.group_service.get_seat_settings",
                   side_effect=InvalidInputError("SEAT_BASE must be an integer: x")) as settings:
            tickets = generate_seat_assignments(group, afl_event, seat_base=3, row="C", section="East")

        settings.assert_not_called()
        assert tickets[0].seat_number == "Row C, Seat 3"
        assert tickets[0].section == "East"

    def test_seat_labels_are_deterministic(self, afl_event, four_attendees):
        group = create_group("evt_afl", "Crew", four_attendees, 6)

        first = generate_seat_assignments(group, afl_event, seat_base=20)
        second = generate_seat_assignments(group, afl_event, seat_base=20)

        assert [t.seat_number for t in first] == [t.seat_number for t in second]

    def test_event_must_match_group(self, mei):
        group = create_group("evt_afl", "Crew", [mei], 4)
        other = Event(id="evt_other", title="Other", date="2025-10-01", price_cents=1000)

        with pytest.raises(InvalidInputError, match="does not match"):
            generate_seat_assignments(group, other)

    def test_unnamed_member_gets_placeholder_name(self, afl_event):
        group = create_group("evt_afl", "Crew", [Person(id="anon")], 4)

        tickets = generate_seat_assignments(group, afl_event, seat_base=1)

        assert tickets[0].user_name == "Guest"


class TestGroupService:
    """Test GroupService against the in-memory repository."""

    def test_create_group_saves(self, service, repository):
        group = service.create_group("evt_afl", "Crew", ["user_mei", "user_priya"], 4, group_id="grp_1")

        stored = repository.get_group("grp_1")
        assert stored is not None
        assert stored.member_ids() == ["user_mei", "user_priya"]
        assert stored.diversity_score == group.diversity_score

    def test_create_group_unknown_event(self, service):
        with pytest.raises(EventNotFoundError):
            service.create_group("evt_missing", "Crew", [], 4)

    def test_create_group_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            service.create_group("evt_afl", "Crew", ["user_nobody"], 4)

    def test_create_group_existing_id(self, service):
        service.create_group("evt_afl", "Crew", [], 4, group_id="grp_1")

        with pytest.raises(InvalidInputError, match="already exists"):
            service.create_group("evt_afl", "Other crew", [], 4, group_id="grp_1")

    def test_join_group_persists(self, service, repository):
        service.create_group("evt_afl", "Crew", ["user_mei"], 3, group_id="grp_1")

        group = service.join_group("grp_1", "user_james")

        assert group.member_ids() == ["user_mei", "user_james"]
        assert repository.get_group("grp_1").member_ids() == ["user_mei", "user_james"]
        assert service.available_spots("grp_1") == 1

    def test_join_unknown_group(self, service):
        with pytest.raises(GroupNotFoundError):
            service.join_group("grp_missing", "user_mei")

    def test_join_full_group_does_not_save(self, service, repository):
        service.create_group("evt_afl", "Pair", ["user_mei", "user_priya"], 2, group_id="grp_1")

        with pytest.raises(GroupFullError):
            service.join_group("grp_1", "user_james")

        assert repository.get_group("grp_1").member_ids() == ["user_mei", "user_priya"]

    def test_list_event_groups(self, service):
        service.create_group("evt_afl", "First", [], 4, group_id="grp_1")
        service.create_group("evt_afl", "Second", [], 4, group_id="grp_2")

        groups = service.list_event_groups("evt_afl")

        assert [g.id for g in groups] == ["grp_1", "grp_2"]
        assert service.list_event_groups("evt_other") == []


class TestTryJoinGroup:
    """Test GroupService.try_join_group messages."""

    def test_success(self, service):
        service.create_group("evt_afl", "Crew", [], 4, group_id="grp_1")

        assert service.try_join_group("grp_1", "user_mei") == (True, "Joined Crew")

    def test_group_not_found(self, service):
        assert service.try_join_group("grp_missing", "user_mei") == (False, "Group not found")

    def test_user_not_found(self, service):
        service.create_group("evt_afl", "Crew", [], 4, group_id="grp_1")

        assert service.try_join_group("grp_1", "user_nobody") == (False, "User not found")

    def test_full(self, service):
        service.create_group("evt_afl", "Solo", ["user_mei"], 1, group_id="grp_1")

        assert service.try_join_group("grp_1", "user_priya") == (False, "Group is full")

    def test_duplicate(self, service):
        service.create_group("evt_afl", "Crew", ["user_mei"], 4, group_id="grp_1")

        assert service.try_join_group("grp_1", "user_mei") == (False, "Already a member")


class TestIssueGroupTickets:
    """Test GroupService.issue_group_tickets."""

    @pytest.fixture(autouse=True)
    def seat_settings(self):
        with patch("src.services.group_service.get_seat_settings", return_value=DEFAULT_SEATS):
            yield

    def test_issue_tickets(self, service):
        service.create_group("evt_afl", "Crew", ["user_mei", "user_priya"], 4, group_id="grp_1")

        tickets = service.issue_group_tickets("grp_1")

        assert [t.seat_number for t in tickets] == ["Row 12, Seat 20", "Row 12, Seat 21"]
        assert service.get_group_tickets("grp_1") == tickets

    def test_second_call_returns_same_tickets(self, service):
        service.create_group("evt_afl", "Crew", ["user_mei", "user_priya"], 4, group_id="grp_1")

        first = service.issue_group_tickets("grp_1")
        second = service.issue_group_tickets("grp_1")

        assert [t.id for t in second] == [t.id for t in first]

    def test_late_joiner_gets_next_seat(self, service):
        service.create_group("evt_afl", "Crew", ["user_mei", "user_priya"], 4, group_id="grp_1")
        first = service.issue_group_tickets("grp_1")

        service.join_group("grp_1", "user_james")
        tickets = service.issue_group_tickets("grp_1")

        assert len(tickets) == 3
        assert [t.id for t in tickets[:2]] == [t.id for t in first]
        assert tickets[2].user_id == "user_james"
        assert tickets[2].seat_number == "Row 12, Seat 22"

    def test_unknown_group(self, service):
        with pytest.raises(GroupNotFoundError):
            service.issue_group_tickets("grp_missing")

    def test_missing_event(self, service, repository, mei):
        repository.save_group(create_group("evt_gone", "Orphans", [mei], 4, group_id="grp_x"))

        with pytest.raises(EventNotFoundError):
            service.issue_group_tickets("grp_x")
