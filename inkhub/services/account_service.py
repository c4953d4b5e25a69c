"""계정 Service — 등록, 조회, 삭제, 샵 소속 아티스트 목록

자격 증명(비밀번호, 토큰)은 다루지 않는다. 인증된 계정 ID는
API 계층이 전달한다.
"""

import logging
import uuid
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

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
from inkhub.core.errors import InvalidArgumentError, NotFoundError
from inkhub.db.stores import UserDirectory

logger = logging.getLogger(__name__)


def build_profile(role: Role, fields: dict[str, Any]) -> Profile:
    """역할별 프로필 생성. 해당 역할에 없는 필드는 무시한다."""
    if role == Role.ARTIST:
        price_range = fields.get("price_range") or ""
        if price_range not in PRICE_RANGES:
            raise InvalidArgumentError("Invalid price range")
        return ArtistProfile(
            bio=fields.get("bio") or "",
            location=fields.get("location") or "",
            price_range=price_range,
            styles=list(fields.get("styles") or []),
        )
    if role == Role.SHOP:
        return ShopProfile(
            bio=fields.get("bio") or "",
            location=fields.get("location") or "",
            phone=fields.get("phone") or "",
            website=fields.get("website") or "",
            hours=fields.get("hours") or "",
        )
    return EnthusiastProfile()


class AccountService:
    """계정 CRUD"""

    def __init__(self, db: Session, users: Optional[UserDirectory] = None) -> None:
        self._db = db
        self._users = users or UserDirectory(db)

    def register(
        self,
        username: str,
        email: str,
        role: str,
        profile_pic: Optional[str] = None,
        profile_fields: Optional[dict[str, Any]] = None,
    ) -> Account:
        """새 계정 등록.
        1. 이메일/사용자명 중복 확인
        2. 사용자명 형식 확인
        3. 역할별 프로필 검증 후 저장
        """
        if self._users.email_taken(email):
            raise InvalidArgumentError("Email already in use")
        if self._users.username_taken(username):
            raise InvalidArgumentError("Username already taken")
        if not USERNAME_PATTERN.match(username):
            raise InvalidArgumentError(
                "Username can only contain letters, numbers, and underscores"
            )

        try:
            account_role = Role(role)
        except ValueError:
            raise InvalidArgumentError("Invalid user type")

        account = Account(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            role=account_role,
            profile=build_profile(account_role, profile_fields or {}),
            profile_pic=profile_pic or DEFAULT_PROFILE_PIC,
        )

        try:
            self._users.create(account)
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            raise InvalidArgumentError("Username or email already in use")

        logger.info("Account registered: id=%s role=%s", account.id, account.role.value)
        return account

    def get_account(self, id_or_username: str) -> Account:
        """ID 우선, 없으면 사용자명으로 조회"""
        account = self._users.find_by_id(id_or_username)
        if account is None:
            account = self._users.find_by_username(id_or_username)
        if account is None:
            raise NotFoundError("User not found")
        return account

    def get_current(self, actor_id: str) -> Account:
        account = self._users.find_by_id(actor_id)
        if account is None:
            raise NotFoundError("User not found")
        return account

    def delete_account(self, actor_id: str) -> None:
        """계정 삭제. 요청/팔로우/소속 링크는 FK로 함께 정리된다."""
        self.get_current(actor_id)
        self._users.delete(actor_id)
        self._db.commit()
        logger.info("Account deleted: id=%s", actor_id)

    def get_shop_artists(self, shop_id: str) -> list[AccountSummary]:
        """샵 소속 아티스트 목록 (사용자명순)"""
        shop = self.get_current(shop_id)
        if not shop.is_shop:
            raise InvalidArgumentError("User is not a shop")
        summaries = self._users.summaries(shop.artist_links)
        return sorted(summaries.values(), key=lambda s: s.username)
