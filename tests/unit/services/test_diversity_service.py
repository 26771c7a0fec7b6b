"""Unit tests for diversity_service."""
import pytest

from src.models.person import Person
from src.services.diversity_service import (
    age_to_bracket,
    compute_diversity_index,
    dimension_scores,
    discount_description,
    discount_rate_for_group_size,
    discount_rate_for_score,
    score_tier,
)
from src.utils.exceptions import InvalidInputError


class TestAgeToBracket:
    """Test age_to_bracket function."""

    @pytest.mark.parametrize("age,expected", [
        (0, "<18"),
        (17, "<18"),
        (18, "18–24"),
        (24, "18–24"),
        (25, "25–34"),
        (34, "25–34"),
        (35, "35–49"),
        (49, "35–49"),
        (50, "50–64"),
        (64, "50–64"),
        (65, "65+"),
        (101, "65+"),
    ])
    def test_bracket_boundaries(self, age, expected):
        assert age_to_bracket(age) == expected

    def test_negative_age_is_rejected(self):
        with pytest.raises(InvalidInputError, match="negative"):
            age_to_bracket(-1)

    def test_missing_age_is_rejected(self):
        with pytest.raises(InvalidInputError):
            age_to_bracket(None)

    def test_bool_is_not_an_age(self):
        with pytest.raises(InvalidInputError):
            age_to_bracket(True)


class TestComputeDiversityIndex:
    """Test compute_diversity_index function."""

    def test_empty_group_scores_zero(self):
        assert compute_diversity_index([]) == 0

    def test_single_person_scores_zero(self, james):
        assert compute_diversity_index([james]) == 0

    def test_two_people_different_everywhere_score_100(self):
        a = Person(id="a", age=20, gender="Female", country_of_birth="China",
                   language_at_home="Mandarin", state="SA")
        b = Person(id="b", age=70, gender="Male", country_of_birth="Brazil",
                   language_at_home="Portuguese", state="NSW",
                   is_first_nations=True, has_disability=True)

        assert compute_diversity_index([a, b]) == 100

    def test_identical_people_score_zero(self):
        a = Person(id="a", age=30, gender="Male", country_of_birth="Italy",
                   language_at_home="Italian", state="SA")
        b = Person(id="b", age=31, gender="Male", country_of_birth="Italy",
                   language_at_home="Italian", state="SA")

        assert compute_diversity_index([a, b]) == 0

    def test_four_attendee_scenario(self, four_attendees):
        """China/India/Lebanon/Australia, all SA, one First Nations member."""
        scores = dimension_scores(four_attendees)

        assert scores["countryOfBirth"] == 1.0
        assert scores["languageAtHome"] == 1.0
        assert scores["gender"] == pytest.approx(1 / 3)
        assert scores["age"] == pytest.approx(2 / 3)
        assert scores["state"] == 0.0
        assert scores["firstNations"] == pytest.approx(1 / 3)
        assert scores["disability"] == 0.0

        score = compute_diversity_index(four_attendees)
        assert score == 48
        assert discount_rate_for_score(score) == 0.05

    def test_dimension_without_values_is_excluded(self, four_attendees):
        """Nobody reporting a country leaves six dimensions in the average."""
        for person in four_attendees:
            person.country_of_birth = None

        scores = dimension_scores(four_attendees)
        assert "countryOfBirth" not in scores
        assert len(scores) == 6

        expected = (1.0 + 1 / 3 + 2 / 3 + 0.0 + 1 / 3 + 0.0) / 6
        assert compute_diversity_index(four_attendees) == round(expected * 100) == 39

    def test_empty_string_counts_as_missing(self):
        a = Person(id="a", country_of_birth="")
        b = Person(id="b", country_of_birth="Chile")

        scores = dimension_scores([a, b])

        # One reported value: included, but no variety
        assert scores["countryOfBirth"] == 0.0

    def test_missing_values_still_count_in_denominator(self):
        people = [
            Person(id="a", country_of_birth="Chile"),
            Person(id="b", country_of_birth="Peru"),
            Person(id="c"),
        ]

        assert dimension_scores(people)["countryOfBirth"] == pytest.approx(0.5)

    def test_missing_ages_are_dropped(self):
        people = [Person(id="a", age=20), Person(id="b")]

        assert dimension_scores(people)["age"] == 0.0

    def test_boolean_dimensions_always_present(self):
        people = [Person(id="a"), Person(id="b")]

        scores = dimension_scores(people)

        assert list(scores) == ["firstNations", "disability"]
        assert compute_diversity_index(people) == 0

    def test_half_rounds_up(self):
        """Mean of 0.125 renders as 13, not banker's-rounded 12."""
        people = [
            Person(id="a", gender="Female", state="SA"),
            Person(id="b", gender="Female", state="SA"),
            Person(id="c", gender="Male", state="SA"),
        ]

        assert compute_diversity_index(people) == 13

    def test_input_order_does_not_matter(self, four_attendees):
        assert compute_diversity_index(four_attendees) == compute_diversity_index(
            list(reversed(four_attendees))
        )


class TestDiscountRateForScore:
    """Test discount_rate_for_score function."""

    @pytest.mark.parametrize("score,expected", [
        (100, 0.25),
        (85, 0.25),
        (84, 0.15),
        (70, 0.15),
        (69, 0.10),
        (50, 0.10),
        (49, 0.05),
        (30, 0.05),
        (29, 0.0),
        (0, 0.0),
    ])
    def test_tiers(self, score, expected):
        assert discount_rate_for_score(score) == expected


class TestDiscountRateForGroupSize:
    """Test discount_rate_for_group_size function."""

    @pytest.mark.parametrize("other_members,expected", [
        (0, 0.0),
        (1, 0.15),
        (2, 0.20),
        (3, 0.25),
        (10, 0.25),
        (-1, 0.0),
    ])
    def test_tiers(self, other_members, expected):
        assert discount_rate_for_group_size(other_members) == expected


class TestPresentationHelpers:
    """Test discount_description and score_tier."""

    @pytest.mark.parametrize("rate,expected", [
        (0.0, "0%"),
        (0.05, "5%"),
        (0.1, "10%"),
        (0.15, "15%"),
        (0.2, "20%"),
        (0.25, "25%"),
    ])
    def test_discount_description(self, rate, expected):
        assert discount_description(rate) == expected

    @pytest.mark.parametrize("score,expected", [
        (90, "excellent"),
        (70, "high"),
        (55, "medium"),
        (30, "low"),
        (10, "none"),
    ])
    def test_score_tier(self, score, expected):
        assert score_tier(score) == expected
