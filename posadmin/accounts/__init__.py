from .schemas import Profile
from .store import ProfileStore
from .listing import ListingQuery, Page, apply_listing, filter_by_fullname, paginate, page_window

__all__ = [
    "Profile",
    "ProfileStore",
    "ListingQuery",
    "Page",
    "apply_listing",
    "filter_by_fullname",
    "paginate",
    "page_window",
]
