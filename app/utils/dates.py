from datetime import date
from typing import Optional


def calculate_age(date_of_birth: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole years elapsed since ``date_of_birth`` using 365.25-day years."""
    if date_of_birth is None:
        return None
    today = today or date.today()
    return int((today - date_of_birth).days // 365.25)
