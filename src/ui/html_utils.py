"""Utilities for preparing HTML snippets before rendering in Streamlit."""
import html
from textwrap import dedent
from typing import Optional


def html_block(template: str) -> str:
    """
    Normalize multi-line HTML so Streamlit doesn't treat it as Markdown code.

    Streamlit's Markdown renderer interprets lines with >=4 leading spaces as
    code blocks. We dedent and strip leading whitespace on each line to avoid
    that while keeping the markup intact.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def safe_text(value: Optional[str], fallback: str = "") -> str:
    """Escape user supplied text for embedding in HTML."""
    if value is None or not str(value).strip():
        return html.escape(fallback)
    return html.escape(str(value))


def format_currency(amount: float) -> str:
    """Format dollars as AUD, e.g. 1234.5 -> 'A$1,234.50'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}A${abs(amount):,.2f}"
