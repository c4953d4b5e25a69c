"""소속 워크플로 규칙 — 순수 Python

저장소 접근 없이 이미 읽어온 Account / AffiliationRequest만으로
전제 조건을 판정한다. 위반 시 도메인 에러를 발생시킨다.
"""

import logging
from typing import Optional

from inkhub.core.account.models import Account
from inkhub.core.affiliation.models import (
    AffiliationRequest,
    AffiliationStatus,
    StatusView,
)
from inkhub.core.errors import ForbiddenError, InvalidArgumentError

logger = logging.getLogger(__name__)

MSG_SELF_REQUEST = "Cannot send a request to yourself"
MSG_INVALID_PAIR = "Affiliation must be between an artist and a shop"
MSG_ARTIST_TAKEN = "Artist is already affiliated with a shop"
MSG_ALREADY_AFFILIATED = "Already affiliated"
MSG_REQUEST_EXISTS = "A pending request already exists"
MSG_NOT_RECIPIENT = "Not authorized to accept this request"
MSG_NOT_PARTY = "Not authorized"
MSG_NOT_VALID_PAIR = "Not a valid artist-shop pair"
MSG_NOT_AFFILIATED = "Not currently affiliated"


def pair_key(a: str, b: str) -> str:
    """방향 무관 쌍 키. {A, B}와 {B, A}는 같은 키."""
    low, high = sorted((a, b))
    return f"{low}:{high}"


def resolve_pair(a: Account, b: Account) -> Optional[tuple[Account, Account]]:
    """(artist, shop) 반환. 아티스트 1 + 샵 1 조합이 아니면 None."""
    if a.is_artist and b.is_shop:
        return a, b
    if a.is_shop and b.is_artist:
        return b, a
    return None


def require_pair(a: Account, b: Account, message: str = MSG_INVALID_PAIR) -> tuple[Account, Account]:
    pair = resolve_pair(a, b)
    if pair is None:
        raise InvalidArgumentError(message)
    return pair


def is_affiliated(artist: Account, shop: Account) -> bool:
    """양측 링크가 모두 일치할 때만 소속으로 본다."""
    return artist.shop_link == shop.id and artist.id in shop.artist_links


def validate_send(
    actor: Account,
    target: Account,
    existing: Optional[AffiliationRequest],
) -> tuple[Account, Account]:
    """sendRequest 전제 조건. 순서대로 검사하며 첫 위반이 우선한다.

    Returns: (artist, shop)
    """
    if actor.id == target.id:
        raise InvalidArgumentError(MSG_SELF_REQUEST)

    artist, shop = require_pair(actor, target)

    if artist.shop_link is not None:
        raise InvalidArgumentError(MSG_ARTIST_TAKEN)

    if artist.id in shop.artist_links:
        raise InvalidArgumentError(MSG_ALREADY_AFFILIATED)

    if existing is not None:
        raise InvalidArgumentError(MSG_REQUEST_EXISTS)

    return artist, shop


def validate_accept_actor(request: AffiliationRequest, actor_id: str) -> None:
    """수신자만 수락 가능. 발신자는 자신의 제안을 수락할 수 없다."""
    if request.to_id != actor_id:
        logger.info(
            "Accept rejected: actor=%s is not recipient of request=%s",
            actor_id,
            request.id,
        )
        raise ForbiddenError(MSG_NOT_RECIPIENT)


def validate_decline_actor(request: AffiliationRequest, actor_id: str) -> None:
    """발신자/수신자 모두 거절(취소) 가능"""
    if not request.involves(actor_id):
        logger.info(
            "Decline rejected: actor=%s is not a party of request=%s",
            actor_id,
            request.id,
        )
        raise ForbiddenError(MSG_NOT_PARTY)


def validate_remove(actor: Account, target: Account) -> tuple[Account, Account]:
    """removeAffiliation 전제 조건. 소속 판정은 아티스트 측 링크 기준."""
    artist, shop = require_pair(actor, target, MSG_NOT_VALID_PAIR)
    if artist.shop_link != shop.id:
        raise InvalidArgumentError(MSG_NOT_AFFILIATED)
    return artist, shop


def derive_status(
    viewer: Account,
    target: Optional[Account],
    request: Optional[AffiliationRequest],
) -> StatusView:
    """소속 → 대기 요청 → none 순서로 상태 판정"""
    if target is not None:
        pair = resolve_pair(viewer, target)
        if pair is not None and is_affiliated(*pair):
            return StatusView(status=AffiliationStatus.AFFILIATED)

    if request is None:
        return StatusView(status=AffiliationStatus.NONE)

    if request.from_id == viewer.id:
        return StatusView(status=AffiliationStatus.PENDING_SENT, request_id=request.id)
    return StatusView(status=AffiliationStatus.PENDING_RECEIVED, request_id=request.id)
