# Utilities package
from .pagination import paginate_slice, MAX_PAGE_SIZE
from .dates import calculate_age

__all__ = [
    "paginate_slice",
    "MAX_PAGE_SIZE",
    "calculate_age",
]
