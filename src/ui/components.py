"""HTML building blocks shared by the purchase and groups pages."""
from typing import Dict

from src.models.group import Group
from src.services.diversity_service import discount_description, score_tier
from src.services.pricing_service import SCHEME_DIVERSITY, PurchaseQuote
from src.ui.html_utils import format_currency, html_block, safe_text

TIER_COLORS: Dict[str, str] = {
    "excellent": "#22c55e",
    "high": "#a3e635",
    "medium": "#f97316",
    "low": "#ef4444",
    "none": "#94a3b8",
}

DIMENSION_LABELS: Dict[str, str] = {
    "countryOfBirth": "Country of birth",
    "languageAtHome": "Language at home",
    "gender": "Gender",
    "age": "Age bracket",
    "state": "State",
    "firstNations": "First Nations",
    "disability": "Disability",
}


def meter_color(score: int) -> str:
    """Colour of the diversity meter for a score."""
    return TIER_COLORS[score_tier(score)]


def render_diversity_meter(score: int, label: str = "Diversity index") -> str:
    """
    Build the diversity meter bar.

    Args:
        score: Diversity index 0-100
        label: Caption shown above the bar

    Returns:
        HTML string
    """
    width = max(0, min(100, score))
    color = meter_color(score)
    return html_block(f"""
        <div class="diversity-meter">
            <div style="display: flex; justify-content: space-between; font-weight: 600;">
                <span>{safe_text(label)}</span>
                <span style="color: {color};">{score}/100</span>
            </div>
            <div style="background: #2d3748; border-radius: 8px; height: 10px; overflow: hidden;">
                <div style="width: {width}%; height: 100%; background: {color};"></div>
            </div>
        </div>
    """)


def render_group_card(group: Group) -> str:
    """Summary card for one group."""
    spots = group.available_spots()
    if group.is_complete:
        status = '<span style="color: #f87171;">Full</span>'
    else:
        noun = "spot" if spots == 1 else "spots"
        status = f'<span style="color: #22d3ee;">{spots} {noun} left</span>'

    return html_block(f"""
        <div class="group-card" style="padding: 16px; border-radius: 12px; background: #16213e;">
            <div style="font-size: 1.1rem; font-weight: 700;">{safe_text(group.name)}</div>
            <div style="color: #94a3b8;">{len(group.members)}/{group.max_members} members · {status}</div>
            <div>Group discount: <strong>{group.discount_percentage()}</strong></div>
        </div>
    """)


def quote_rows(quote: PurchaseQuote) -> Dict[str, str]:
    """Invoice lines for a quote, in display order."""
    if quote.scheme == SCHEME_DIVERSITY:
        discount_label = f"Diversity discount ({discount_description(quote.discount_rate)})"
    else:
        discount_label = f"Group discount ({discount_description(quote.discount_rate)})"

    return {
        f"Base ({quote.attendee_count}×)": format_currency(quote.base_total),
        discount_label: format_currency(-quote.discount_amount),
        "Total": format_currency(quote.final_total),
    }
