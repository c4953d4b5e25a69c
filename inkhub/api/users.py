"""User API endpoints."""

from fastapi import APIRouter, Depends

from inkhub.api.deps import get_account_service, get_current_user_id, get_follow_service
from inkhub.api.schemas import (
    AccountInfo,
    AccountSummaryInfo,
    ErrorResponse,
    MessageResponse,
    RegisterRequest,
)
from inkhub.services.account_service import AccountService
from inkhub.services.follow_service import FollowService

router = APIRouter(prefix="/users", tags=["users"])

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.post("", response_model=AccountInfo, status_code=201, responses=_ERRORS)
def register(
    request: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> AccountInfo:
    """계정 등록"""
    account = service.register(
        username=request.username,
        email=request.email,
        role=request.user_type,
        profile_pic=request.profile_pic,
        profile_fields=request.profile_fields(),
    )
    return AccountInfo.of(account)


@router.get("/me", response_model=AccountInfo, responses=_ERRORS)
def get_me(
    user_id: str = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service),
) -> AccountInfo:
    return AccountInfo.of(service.get_current(user_id))


@router.delete("/me", response_model=MessageResponse, responses=_ERRORS)
def delete_me(
    user_id: str = Depends(get_current_user_id),
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """계정 삭제"""
    service.delete_account(user_id)
    return MessageResponse(message="Account deleted")


@router.put("/follow/{target_id}", response_model=MessageResponse, responses=_ERRORS)
def follow(
    target_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FollowService = Depends(get_follow_service),
) -> MessageResponse:
    service.follow(user_id, target_id)
    return MessageResponse(message="Successfully followed user")


@router.put("/unfollow/{target_id}", response_model=MessageResponse, responses=_ERRORS)
def unfollow(
    target_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FollowService = Depends(get_follow_service),
) -> MessageResponse:
    service.unfollow(user_id, target_id)
    return MessageResponse(message="Successfully unfollowed user")


@router.get("/{id_or_username}", response_model=AccountInfo, responses=_ERRORS)
def get_user(
    id_or_username: str,
    service: AccountService = Depends(get_account_service),
) -> AccountInfo:
    """ID 또는 사용자명으로 조회"""
    return AccountInfo.of(service.get_account(id_or_username))


@router.get("/{user_id}/artists", response_model=list[AccountSummaryInfo], responses=_ERRORS)
def get_shop_artists(
    user_id: str,
    service: AccountService = Depends(get_account_service),
) -> list[AccountSummaryInfo]:
    """샵 소속 아티스트 목록"""
    return [AccountSummaryInfo.of(s) for s in service.get_shop_artists(user_id)]


@router.get("/{user_id}/followers", response_model=list[AccountSummaryInfo], responses=_ERRORS)
def get_followers(
    user_id: str,
    service: FollowService = Depends(get_follow_service),
) -> list[AccountSummaryInfo]:
    return [AccountSummaryInfo.of(s) for s in service.get_followers(user_id)]


@router.get("/{user_id}/following", response_model=list[AccountSummaryInfo], responses=_ERRORS)
def get_following(
    user_id: str,
    service: FollowService = Depends(get_follow_service),
) -> list[AccountSummaryInfo]:
    return [AccountSummaryInfo.of(s) for s in service.get_following(user_id)]
