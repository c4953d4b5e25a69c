"""Shared FastAPI dependencies: caller identity and request-scoped services."""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from inkhub.db.database import get_db
from inkhub.services.account_service import AccountService
from inkhub.services.affiliation_service import AffiliationService
from inkhub.services.follow_service import FollowService

USER_ID_HEADER = "X-User-Id"


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    """인증 계층이 확인한 계정 ID. 없으면 401."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


def get_affiliation_service(db: Session = Depends(get_db)) -> AffiliationService:
    """AffiliationService 인스턴스 반환 (의존성 주입)"""
    return AffiliationService(db)


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """AccountService 인스턴스 반환 (의존성 주입)"""
    return AccountService(db)


def get_follow_service(db: Session = Depends(get_db)) -> FollowService:
    """FollowService 인스턴스 반환 (의존성 주입)"""
    return FollowService(db)
