from search_portal.models.user import User
from search_portal.models.search_string import SearchString
from search_portal.models.string_bucket import StringBucket
from search_portal.models.search_name import SearchName
from search_portal.models.search_history import SearchHistory
from search_portal.models.brand import Brand

__all__ = [
    "User",
    "SearchString",
    "StringBucket",
    "SearchName",
    "SearchHistory",
    "Brand",
]
