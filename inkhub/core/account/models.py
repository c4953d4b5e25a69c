"""계정 도메인 모델 (DB 무관)

역할별 필드는 상속 대신 태그드 변형으로 표현한다:
Role 열거형 + 역할마다 하나의 프로필 데이터 클래스.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
PRICE_RANGES = ("", "$", "$$", "$$$", "$$$$")
DEFAULT_PROFILE_PIC = "/default-profile.png"


class Role(str, Enum):
    """계정 역할 (생성 후 변경 불가)"""

    ENTHUSIAST = "enthusiast"
    ARTIST = "artist"
    SHOP = "shop"


@dataclass
class EnthusiastProfile:
    """애호가 전용 필드 없음"""


@dataclass
class ArtistProfile:
    """아티스트 프로필. shop_link가 None이면 소속 없음."""

    bio: str = ""
    location: str = ""
    price_range: str = ""
    styles: list[str] = field(default_factory=list)
    shop_link: Optional[str] = None


@dataclass
class ShopProfile:
    """샵 프로필. artist_links는 소속 아티스트 ID 집합."""

    bio: str = ""
    location: str = ""
    phone: str = ""
    website: str = ""
    hours: str = ""
    artist_links: set[str] = field(default_factory=set)


Profile = Union[EnthusiastProfile, ArtistProfile, ShopProfile]

PROFILE_TYPES: dict[Role, type] = {
    Role.ENTHUSIAST: EnthusiastProfile,
    Role.ARTIST: ArtistProfile,
    Role.SHOP: ShopProfile,
}


@dataclass
class Account:
    """계정 = 식별자 + 역할 + 역할별 프로필"""

    id: str
    username: str
    email: str
    role: Role
    profile: Profile
    profile_pic: str = DEFAULT_PROFILE_PIC
    followers: set[str] = field(default_factory=set)
    following: set[str] = field(default_factory=set)
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        expected = PROFILE_TYPES[self.role]
        if not isinstance(self.profile, expected):
            raise TypeError(
                f"{self.role.value} account requires {expected.__name__}, "
                f"got {type(self.profile).__name__}"
            )

    @property
    def is_artist(self) -> bool:
        return self.role == Role.ARTIST

    @property
    def is_shop(self) -> bool:
        return self.role == Role.SHOP

    @property
    def shop_link(self) -> Optional[str]:
        """아티스트의 소속 샵 ID. 아티스트가 아니면 None."""
        if isinstance(self.profile, ArtistProfile):
            return self.profile.shop_link
        return None

    @property
    def artist_links(self) -> set[str]:
        """샵의 소속 아티스트 ID 집합. 샵이 아니면 빈 집합."""
        if isinstance(self.profile, ShopProfile):
            return self.profile.artist_links
        return set()


@dataclass
class AccountSummary:
    """표시용 계정 식별 정보 (요청 목록 등에서 사용)"""

    id: str
    username: str
    profile_pic: str
    role: Role

    @classmethod
    def of(cls, account: Account) -> AccountSummary:
        return cls(
            id=account.id,
            username=account.username,
            profile_pic=account.profile_pic,
            role=account.role,
        )
