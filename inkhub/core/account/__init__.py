"""계정 Core 패키지 — 공개 API"""

from inkhub.core.account.models import (
    DEFAULT_PROFILE_PIC,
    PRICE_RANGES,
    USERNAME_PATTERN,
    Account,
    AccountSummary,
    ArtistProfile,
    EnthusiastProfile,
    Profile,
    Role,
    ShopProfile,
)

__all__ = [
    "DEFAULT_PROFILE_PIC",
    "PRICE_RANGES",
    "USERNAME_PATTERN",
    "Account",
    "AccountSummary",
    "ArtistProfile",
    "EnthusiastProfile",
    "Profile",
    "Role",
    "ShopProfile",
]
