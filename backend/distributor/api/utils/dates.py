from datetime import datetime, timezone
from typing import Optional


def parse_optional_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Lenient ISO-8601 parsing for form fields.

    Returns None for empty or unparseable input. Aware values are converted
    to naive UTC, the way dates are stored.
    """
    if not value or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
