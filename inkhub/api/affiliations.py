"""Affiliation API endpoints."""

from fastapi import APIRouter, Depends

from inkhub.api.deps import get_affiliation_service, get_current_user_id
from inkhub.api.schemas import (
    AffiliationAcceptResponse,
    AffiliationRequestInfo,
    AffiliationStatusResponse,
    ErrorResponse,
    MessageResponse,
)
from inkhub.services.affiliation_service import AffiliationService

router = APIRouter(prefix="/affiliations", tags=["affiliations"])

_ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.post("/request/{target_id}", response_model=AffiliationRequestInfo, responses=_ERRORS)
def send_request(
    target_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AffiliationService = Depends(get_affiliation_service),
) -> AffiliationRequestInfo:
    """소속 요청 전송 (artist→shop 또는 shop→artist)"""
    view = service.send_request(user_id, target_id)
    return AffiliationRequestInfo.of(view)


@router.put("/accept/{request_id}", response_model=AffiliationAcceptResponse, responses=_ERRORS)
def accept_request(
    request_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AffiliationService = Depends(get_affiliation_service),
) -> AffiliationAcceptResponse:
    """대기 요청 수락 (수신자만)"""
    link = service.accept_request(user_id, request_id)
    return AffiliationAcceptResponse(
        message="Affiliation accepted",
        artist_id=link.artist_id,
        shop_id=link.shop_id,
    )


@router.delete("/request/{request_id}", response_model=MessageResponse, responses=_ERRORS)
def decline_request(
    request_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AffiliationService = Depends(get_affiliation_service),
) -> MessageResponse:
    """대기 요청 거절/취소 (양측)"""
    service.decline_request(user_id, request_id)
    return MessageResponse(message="Request declined/cancelled")


@router.delete("/remove/{target_id}", response_model=MessageResponse, responses=_ERRORS)
def remove_affiliation(
    target_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AffiliationService = Depends(get_affiliation_service),
) -> MessageResponse:
    """기존 소속 해제 (양측)"""
    service.remove_affiliation(user_id, target_id)
    return MessageResponse(message="Affiliation removed")


@router.get("/pending", response_model=list[AffiliationRequestInfo])
def list_pending(
    user_id: str = Depends(get_current_user_id),
    service: AffiliationService = Depends(get_affiliation_service),
) -> list[AffiliationRequestInfo]:
    """현재 사용자가 관련된 대기 요청 (최신순)"""
    return [AffiliationRequestInfo.of(v) for v in service.get_pending_requests(user_id)]


@router.get("/status/{target_id}", response_model=AffiliationStatusResponse, responses=_ERRORS)
def get_status(
    target_id: str,
    user_id: str = Depends(get_current_user_id),
    service: AffiliationService = Depends(get_affiliation_service),
) -> AffiliationStatusResponse:
    """대상과의 소속 상태"""
    view = service.get_affiliation_status(user_id, target_id)
    return AffiliationStatusResponse(status=view.status.value, request_id=view.request_id)
