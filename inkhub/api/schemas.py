"""API request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from inkhub.core.account.models import Account, AccountSummary
from inkhub.core.affiliation.models import RequestView


# === Request Schemas ===


class RegisterRequest(BaseModel):
    """계정 등록 요청"""

    username: str = Field(..., min_length=1, max_length=50, description="사용자명")
    email: str = Field(..., min_length=3, description="이메일")
    user_type: str = Field(..., description="enthusiast | artist | shop")
    profile_pic: Optional[str] = None

    # artist / shop
    bio: Optional[str] = None
    location: Optional[str] = None

    # artist
    price_range: Optional[str] = Field(None, description="'', $, $$, $$$, $$$$")
    styles: list[str] = Field(default_factory=list)

    # shop
    phone: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[str] = None

    def profile_fields(self) -> dict:
        return self.model_dump(
            include={"bio", "location", "price_range", "styles", "phone", "website", "hours"}
        )


# === Response Schemas ===


class AccountSummaryInfo(BaseModel):
    """표시용 계정 정보"""

    id: str
    username: str
    profile_pic: str
    user_type: str

    @classmethod
    def of(cls, summary: AccountSummary) -> "AccountSummaryInfo":
        return cls(
            id=summary.id,
            username=summary.username,
            profile_pic=summary.profile_pic,
            user_type=summary.role.value,
        )


class AccountInfo(BaseModel):
    """계정 상세 정보. 역할에 없는 필드는 None."""

    id: str
    username: str
    email: str
    user_type: str
    profile_pic: str
    created_at: Optional[datetime] = None
    followers_count: int = 0
    following_count: int = 0

    bio: Optional[str] = None
    location: Optional[str] = None
    price_range: Optional[str] = None
    styles: Optional[list[str]] = None
    shop_id: Optional[str] = None
    artist_ids: Optional[list[str]] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[str] = None

    @classmethod
    def of(cls, account: Account) -> "AccountInfo":
        info = cls(
            id=account.id,
            username=account.username,
            email=account.email,
            user_type=account.role.value,
            profile_pic=account.profile_pic,
            created_at=account.created_at,
            followers_count=len(account.followers),
            following_count=len(account.following),
        )
        profile = account.profile
        if account.is_artist:
            info.bio = profile.bio
            info.location = profile.location
            info.price_range = profile.price_range
            info.styles = list(profile.styles)
            info.shop_id = profile.shop_link
        elif account.is_shop:
            info.bio = profile.bio
            info.location = profile.location
            info.phone = profile.phone
            info.website = profile.website
            info.hours = profile.hours
            info.artist_ids = sorted(profile.artist_links)
        return info


class AffiliationRequestInfo(BaseModel):
    """대기 중 소속 요청"""

    id: str
    from_user: AccountSummaryInfo
    to_user: AccountSummaryInfo
    created_at: Optional[datetime] = None

    @classmethod
    def of(cls, view: RequestView) -> "AffiliationRequestInfo":
        return cls(
            id=view.request.id,
            from_user=AccountSummaryInfo.of(view.from_party),
            to_user=AccountSummaryInfo.of(view.to_party),
            created_at=view.request.created_at,
        )


class AffiliationAcceptResponse(BaseModel):
    """소속 수락 응답"""

    message: str
    artist_id: str
    shop_id: str


class AffiliationStatusResponse(BaseModel):
    """소속 상태 응답"""

    status: str
    request_id: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """에러 응답"""

    kind: str
    message: str
