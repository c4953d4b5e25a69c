"""Store collaborators used by the services.

``UserDirectory`` owns account records and their relationship lists;
``AffiliationRequestStore`` owns pending affiliation requests. Both work on a
caller-supplied ``Session`` and never commit: the calling service decides the
transaction boundary so multi-step effects land together.
"""

import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from inkhub.core.account.models import (
    Account,
    AccountSummary,
    ArtistProfile,
    EnthusiastProfile,
    Role,
    ShopProfile,
)
from inkhub.core.affiliation.models import AffiliationRequest
from inkhub.core.affiliation.rules import pair_key
from inkhub.db.models import (
    AccountModel,
    AffiliationRequestModel,
    FollowModel,
    ShopArtistModel,
)

# 일괄 DELETE 후 identity map에서 삭제된 행을 제거한다
_SYNC_FETCH = {"synchronize_session": "fetch"}


class UserDirectory:
    """계정 저장소 — ORM ↔ Core 모델 변환 포함"""

    def __init__(self, db: Session) -> None:
        self._db = db

    # ── 조회 ─────────────────────────────────────────────────

    def find_by_id(self, account_id: str, for_update: bool = False) -> Optional[Account]:
        """항상 DB에서 다시 읽는다 (identity map의 오래된 값 무시)."""
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        row = self._db.scalars(stmt).first()
        if row is None:
            return None
        return self._account_to_core(row)

    def find_by_username(self, username: str) -> Optional[Account]:
        row = self._db.scalars(
            select(AccountModel)
            .where(AccountModel.username == username)
            .execution_options(populate_existing=True)
        ).first()
        if row is None:
            return None
        return self._account_to_core(row)

    def username_taken(self, username: str) -> bool:
        return self._db.scalar(
            select(AccountModel.id).where(AccountModel.username == username)
        ) is not None

    def email_taken(self, email: str) -> bool:
        return self._db.scalar(
            select(AccountModel.id).where(AccountModel.email == email)
        ) is not None

    def summaries(self, account_ids: Iterable[str]) -> dict[str, AccountSummary]:
        """표시용 요약 일괄 조회. 없는 ID는 결과에서 빠진다."""
        ids = set(account_ids)
        if not ids:
            return {}
        rows = self._db.scalars(select(AccountModel).where(AccountModel.id.in_(ids)))
        return {
            row.id: AccountSummary(
                id=row.id,
                username=row.username,
                profile_pic=row.profile_pic,
                role=Role(row.role),
            )
            for row in rows
        }

    # ── 생성/삭제 ────────────────────────────────────────────

    def create(self, account: Account) -> Account:
        row = self._account_to_orm(account)
        self._db.add(row)
        self._db.flush()
        account.created_at = row.created_at
        return account

    def delete(self, account_id: str) -> None:
        """FK CASCADE로 요청/팔로우/샵 링크가 함께 정리된다."""
        self._db.execute(
            delete(AccountModel).where(AccountModel.id == account_id),
            execution_options=_SYNC_FETCH,
        )

    # ── 소속 링크 ────────────────────────────────────────────

    def set_shop_link(
        self,
        artist_id: str,
        shop_id: Optional[str],
        expected: Optional[str] = None,
    ) -> bool:
        """아티스트 측 링크 compare-and-swap.

        현재 값이 expected일 때만 shop_id로 바꾼다. 바뀌었으면 True.
        """
        stmt = update(AccountModel).where(
            AccountModel.id == artist_id,
            AccountModel.role == Role.ARTIST.value,
        )
        if expected is None:
            stmt = stmt.where(AccountModel.shop_id.is_(None))
        else:
            stmt = stmt.where(AccountModel.shop_id == expected)
        result = self._db.execute(
            stmt.values(shop_id=shop_id).execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def add_artist_link(self, shop_id: str, artist_id: str) -> None:
        """샵 측 링크 추가. 이미 있으면 아무것도 하지 않는다."""
        exists = self._db.scalar(
            select(ShopArtistModel.artist_id).where(
                ShopArtistModel.shop_id == shop_id,
                ShopArtistModel.artist_id == artist_id,
            )
        )
        if exists is not None:
            return
        self._db.add(ShopArtistModel(shop_id=shop_id, artist_id=artist_id))
        self._db.flush()

    def remove_artist_link(self, shop_id: str, artist_id: str) -> None:
        self._db.execute(
            delete(ShopArtistModel).where(
                ShopArtistModel.shop_id == shop_id,
                ShopArtistModel.artist_id == artist_id,
            ),
            execution_options=_SYNC_FETCH,
        )

    # ── 팔로우 ───────────────────────────────────────────────

    def add_follow(self, follower_id: str, followee_id: str) -> None:
        self._db.add(FollowModel(follower_id=follower_id, followee_id=followee_id))
        self._db.flush()

    def remove_follow(self, follower_id: str, followee_id: str) -> None:
        self._db.execute(
            delete(FollowModel).where(
                FollowModel.follower_id == follower_id,
                FollowModel.followee_id == followee_id,
            ),
            execution_options=_SYNC_FETCH,
        )

    # ── 변환 ─────────────────────────────────────────────────

    def _artist_ids_of(self, shop_id: str) -> set[str]:
        return set(
            self._db.scalars(
                select(ShopArtistModel.artist_id).where(ShopArtistModel.shop_id == shop_id)
            )
        )

    def _account_to_core(self, row: AccountModel) -> Account:
        """ORM → Core 변환. 역할에 맞는 프로필만 채운다."""
        role = Role(row.role)
        if role == Role.ARTIST:
            profile = ArtistProfile(
                bio=row.bio or "",
                location=row.location or "",
                price_range=row.price_range or "",
                styles=list(row.styles or []),
                shop_link=row.shop_id,
            )
        elif role == Role.SHOP:
            profile = ShopProfile(
                bio=row.bio or "",
                location=row.location or "",
                phone=row.phone or "",
                website=row.website or "",
                hours=row.hours or "",
                artist_links=self._artist_ids_of(row.id),
            )
        else:
            profile = EnthusiastProfile()

        followers = set(
            self._db.scalars(
                select(FollowModel.follower_id).where(FollowModel.followee_id == row.id)
            )
        )
        following = set(
            self._db.scalars(
                select(FollowModel.followee_id).where(FollowModel.follower_id == row.id)
            )
        )

        return Account(
            id=row.id,
            username=row.username,
            email=row.email,
            role=role,
            profile=profile,
            profile_pic=row.profile_pic,
            followers=followers,
            following=following,
            created_at=row.created_at,
        )

    @staticmethod
    def _account_to_orm(account: Account) -> AccountModel:
        """Core → ORM 변환. 소속 링크는 set_shop_link/add_artist_link로만 쓴다."""
        row = AccountModel(
            id=account.id,
            username=account.username,
            email=account.email,
            role=account.role.value,
            profile_pic=account.profile_pic,
        )
        profile = account.profile
        if isinstance(profile, ArtistProfile):
            row.bio = profile.bio
            row.location = profile.location
            row.price_range = profile.price_range
            row.styles = list(profile.styles)
        elif isinstance(profile, ShopProfile):
            row.bio = profile.bio
            row.location = profile.location
            row.phone = profile.phone
            row.website = profile.website
            row.hours = profile.hours
        if account.created_at is not None:
            row.created_at = account.created_at
        return row


class AffiliationRequestStore:
    """대기 중 소속 요청 저장소"""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create(
        self,
        from_id: str,
        to_id: str,
        created_at: Optional[datetime] = None,
    ) -> AffiliationRequest:
        row = AffiliationRequestModel(
            id=str(uuid.uuid4()),
            from_id=from_id,
            to_id=to_id,
            pair_key=pair_key(from_id, to_id),
            created_at=created_at or datetime.now(timezone.utc),
        )
        self._db.add(row)
        self._db.flush()
        return self._request_to_core(row)

    def find_by_id(self, request_id: str) -> Optional[AffiliationRequest]:
        row = self._db.get(AffiliationRequestModel, request_id, populate_existing=True)
        if row is None:
            return None
        return self._request_to_core(row)

    def find_between(self, a: str, b: str) -> Optional[AffiliationRequest]:
        """방향 무관 조회"""
        row = self._db.scalars(
            select(AffiliationRequestModel).where(
                AffiliationRequestModel.pair_key == pair_key(a, b)
            )
        ).first()
        if row is None:
            return None
        return self._request_to_core(row)

    def find_all_involving(self, user_id: str) -> list[AffiliationRequest]:
        """발신/수신 모두 포함, 최신순"""
        rows = self._db.scalars(
            select(AffiliationRequestModel)
            .where(
                or_(
                    AffiliationRequestModel.from_id == user_id,
                    AffiliationRequestModel.to_id == user_id,
                )
            )
            .order_by(AffiliationRequestModel.created_at.desc())
        )
        return [self._request_to_core(row) for row in rows]

    def delete(self, request_id: str) -> bool:
        """삭제했으면 True. 이미 없던 요청이면 False."""
        result = self._db.execute(
            delete(AffiliationRequestModel)
            .where(AffiliationRequestModel.id == request_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def _request_to_core(row: AffiliationRequestModel) -> AffiliationRequest:
        return AffiliationRequest(
            id=row.id,
            from_id=row.from_id,
            to_id=row.to_id,
            created_at=row.created_at,
        )
