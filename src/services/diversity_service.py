"""Diversity index and discount calculations.

All functions here are pure: they read the people they are given and
return numbers. Two discount schemes exist side by side, one keyed on the
diversity score and one keyed on headcount; callers pick one explicitly.
"""
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from src.models.person import Person
from src.utils.exceptions import InvalidInputError
from src.utils.validation import validate_age

AGE_BRACKETS: List[Tuple[int, Optional[int], str]] = [
    (0, 17, "<18"),
    (18, 24, "18–24"),
    (25, 34, "25–34"),
    (35, 49, "35–49"),
    (50, 64, "50–64"),
    (65, None, "65+"),
]

# (lowest score, rate), highest tier first
SCORE_DISCOUNT_TIERS: List[Tuple[int, float]] = [
    (85, 0.25),
    (70, 0.15),
    (50, 0.10),
    (30, 0.05),
]

SCORE_TIER_NAMES: List[Tuple[int, str]] = [
    (85, "excellent"),
    (70, "high"),
    (50, "medium"),
    (30, "low"),
]

GROUP_SIZE_DISCOUNTS: Dict[int, float] = {
    1: 0.15,
    2: 0.20,
}
GROUP_SIZE_MAX_DISCOUNT = 0.25


def age_to_bracket(age: int) -> str:
    """
    Map an age to its bracket label.

    Args:
        age: Age in whole years

    Returns:
        One of "<18", "18–24", "25–34", "35–49", "50–64", "65+"

    Raises:
        InvalidInputError: If age is negative or not an integer
    """
    if age is None:
        raise InvalidInputError("Age is required to compute a bracket")
    validate_age(age)

    for lower, upper, label in AGE_BRACKETS[:-1]:
        if lower <= age <= upper:
            return label
    return AGE_BRACKETS[-1][2]


def _present(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    return value


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _age_bracket_or_none(person: Person) -> Optional[str]:
    if person.age is None:
        return None
    return age_to_bracket(person.age)


DIMENSIONS: List[Tuple[str, Callable[[Person], Optional[str]]]] = [
    ("countryOfBirth", lambda p: _present(p.country_of_birth)),
    ("languageAtHome", lambda p: _present(p.language_at_home)),
    ("gender", lambda p: _present(p.gender)),
    ("age", _age_bracket_or_none),
    ("state", lambda p: _present(p.state)),
    ("firstNations", lambda p: _yes_no(p.is_first_nations)),
    ("disability", lambda p: _yes_no(p.has_disability)),
]


def dimension_scores(people: Sequence[Person]) -> Dict[str, float]:
    """
    Score each demographic dimension between 0 and 1.

    A dimension where nobody reported a value is left out of the result.
    The denominator is always the full group size, so people who did not
    report a value pull the dimension score down.

    Args:
        people: Attendees or group members

    Returns:
        Dict of dimension name to score, in dimension order
    """
    count = len(people)
    if count < 2:
        return {}

    scores: Dict[str, float] = {}
    for name, extract in DIMENSIONS:
        values = [v for v in (extract(person) for person in people) if v is not None]
        if not values:
            continue

        unique_count = len(set(values))
        scores[name] = max(0.0, min(1.0, (unique_count - 1) / (count - 1)))

    return scores


def compute_diversity_index(people: Sequence[Person]) -> int:
    """
    Compute the diversity index of a group.

    Args:
        people: Attendees or group members

    Returns:
        Integer score 0-100; 0 for fewer than two people
    """
    scores = dimension_scores(people)
    if not scores:
        return 0

    average = sum(scores.values()) / len(scores)
    # Half rounds up rather than to even
    return int(math.floor(average * 100 + 0.5))


def discount_rate_for_score(score: int) -> float:
    """
    Discount rate from the diversity score tiers.

    85-100 -> 25%, 70-84 -> 15%, 50-69 -> 10%, 30-49 -> 5%, below -> 0%.
    """
    if score > 100:
        return 0.0
    for lowest, rate in SCORE_DISCOUNT_TIERS:
        if score >= lowest:
            return rate
    return 0.0


def discount_rate_for_group_size(other_members: int) -> float:
    """
    Discount rate from headcount.

    Args:
        other_members: People in the purchase besides the purchaser

    Returns:
        0.15 for 1, 0.20 for 2, 0.25 for 3 or more, else 0.0
    """
    if other_members >= 3:
        return GROUP_SIZE_MAX_DISCOUNT
    return GROUP_SIZE_DISCOUNTS.get(other_members, 0.0)


def discount_description(rate: float) -> str:
    """Render a rate as a whole percentage, e.g. 0.15 -> '15%'."""
    return f"{int(round(rate * 100, 6))}%"


def score_tier(score: int) -> str:
    """Name of the score band, used to colour the diversity meter."""
    for lowest, name in SCORE_TIER_NAMES:
        if score >= lowest:
            return name
    return "none"
