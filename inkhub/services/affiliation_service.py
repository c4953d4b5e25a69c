"""소속 Service — 아티스트↔샵 소속 워크플로

UserDirectory와 AffiliationRequestStore를 같은 Session 위에서 묶어
하나의 트랜잭션으로 실행한다. Service 자체는 상태를 갖지 않는다.

전제 조건은 쓰기 직전에 다시 읽어 검증한다. 아티스트 측 링크는
compare-and-swap으로 쓰므로 동시에 경합한 accept 중 하나만 성공한다.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkhub.core.account.models import Account, AccountSummary
from inkhub.core.affiliation.models import (
    AffiliationLink,
    AffiliationRequest,
    RequestView,
    StatusView,
)
from inkhub.core.affiliation.rules import (
    MSG_ARTIST_TAKEN,
    MSG_INVALID_PAIR,
    MSG_NOT_AFFILIATED,
    MSG_REQUEST_EXISTS,
    derive_status,
    resolve_pair,
    validate_accept_actor,
    validate_decline_actor,
    validate_remove,
    validate_send,
)
from inkhub.core.errors import InvalidArgumentError, NotFoundError
from inkhub.core.logging import get_logger
from inkhub.db.stores import AffiliationRequestStore, UserDirectory

logger = get_logger(__name__)


class AffiliationService:
    """소속 요청 생성/수락/거절/해제 + 상태 조회"""

    def __init__(
        self,
        db: Session,
        users: Optional[UserDirectory] = None,
        requests: Optional[AffiliationRequestStore] = None,
    ) -> None:
        self._db = db
        self._users = users or UserDirectory(db)
        self._requests = requests or AffiliationRequestStore(db)

    # ── 요청 ─────────────────────────────────────────────────

    def send_request(self, actor_id: str, target_id: str) -> RequestView:
        """소속 요청 전송 (artist→shop 또는 shop→artist)"""
        target = self._users.find_by_id(target_id)
        if target is None:
            raise NotFoundError("User not found")
        actor = self._require_account(actor_id)

        existing = self._requests.find_between(actor.id, target.id)
        artist, shop = validate_send(actor, target, existing)

        try:
            request = self._requests.create(actor.id, target.id)
            self._db.commit()
        except IntegrityError:
            # 동시에 같은 쌍의 요청이 먼저 들어간 경우
            self._db.rollback()
            logger.info("Affiliation request rejected: duplicate pair %s/%s", actor.id, target.id)
            raise InvalidArgumentError(MSG_REQUEST_EXISTS)

        logger.info(
            "Affiliation requested: request=%s from=%s to=%s (artist=%s, shop=%s)",
            request.id,
            actor.id,
            target.id,
            artist.id,
            shop.id,
        )
        return self._view(request, {actor.id: actor, target.id: target})

    def accept_request(self, actor_id: str, request_id: str) -> AffiliationLink:
        """수신자만 수락 가능. 수락 시점에 상태를 다시 검증한다."""
        request = self._requests.find_by_id(request_id)
        if request is None:
            raise NotFoundError("Request not found")
        validate_accept_actor(request, actor_id)

        sender = self._users.find_by_id(request.from_id, for_update=True)
        recipient = self._users.find_by_id(request.to_id, for_update=True)
        if sender is None or recipient is None:
            self._discard(request, "party no longer exists")
            raise NotFoundError("One or both users no longer exist")

        pair = resolve_pair(sender, recipient)
        if pair is None:
            self._discard(request, "parties are no longer an artist/shop pair")
            raise InvalidArgumentError(MSG_INVALID_PAIR)
        artist, shop = pair

        if artist.shop_link is not None:
            self._discard(request, "artist affiliated elsewhere")
            raise InvalidArgumentError(MSG_ARTIST_TAKEN)

        # 요청 삭제가 먼저: 이미 거절/취소된 요청으로는 링크를 쓰지 않는다
        claimed = linked = False
        try:
            claimed = self._requests.delete(request.id)
            if claimed:
                linked = self._users.set_shop_link(artist.id, shop.id, expected=None)
            if linked:
                self._users.add_artist_link(shop.id, artist.id)
                self._db.commit()
        except IntegrityError:
            linked = False

        if not linked:
            self._db.rollback()
            self._reject_accept(request, artist.id, shop.id, claimed)

        logger.info(
            "Affiliation accepted: request=%s artist=%s shop=%s",
            request.id,
            artist.id,
            shop.id,
        )
        return AffiliationLink(artist_id=artist.id, shop_id=shop.id)

    def decline_request(self, actor_id: str, request_id: str) -> None:
        """거절 또는 취소. 발신자/수신자 모두 가능, 계정은 변경하지 않는다."""
        request = self._requests.find_by_id(request_id)
        if request is None:
            raise NotFoundError("Request not found")
        validate_decline_actor(request, actor_id)

        self._requests.delete(request.id)
        self._db.commit()
        logger.info("Affiliation request declined: request=%s by=%s", request.id, actor_id)

    # ── 소속 해제 ────────────────────────────────────────────

    def remove_affiliation(self, actor_id: str, target_id: str) -> None:
        """현재 소속 해제. 아티스트/샵 어느 쪽이든 가능."""
        target = self._users.find_by_id(target_id)
        if target is None:
            raise NotFoundError("User not found")
        actor = self._require_account(actor_id)

        artist, shop = validate_remove(actor, target)

        if not self._users.set_shop_link(artist.id, None, expected=shop.id):
            self._db.rollback()
            raise InvalidArgumentError(MSG_NOT_AFFILIATED)
        self._users.remove_artist_link(shop.id, artist.id)
        self._db.commit()

        logger.info("Affiliation removed: artist=%s shop=%s by=%s", artist.id, shop.id, actor_id)

    # ── 조회 ─────────────────────────────────────────────────

    def get_pending_requests(self, actor_id: str) -> list[RequestView]:
        """행위자가 발신/수신한 대기 요청 (최신순).

        한쪽 계정이 사라진 요청은 삭제하고 결과에서 뺀다.
        """
        pending = self._requests.find_all_involving(actor_id)
        summaries = self._users.summaries(
            uid for r in pending for uid in (r.from_id, r.to_id)
        )

        views: list[RequestView] = []
        stale: list[AffiliationRequest] = []
        for request in pending:
            if request.from_id not in summaries or request.to_id not in summaries:
                stale.append(request)
                continue
            views.append(
                RequestView(
                    request=request,
                    from_party=summaries[request.from_id],
                    to_party=summaries[request.to_id],
                )
            )

        if stale:
            for request in stale:
                self._requests.delete(request.id)
            self._db.commit()
            logger.warning("Dropped %d stale affiliation request(s) for %s", len(stale), actor_id)

        return views

    def get_affiliation_status(self, viewer_id: str, target_id: str) -> StatusView:
        """(조회자, 대상) 관계 상태: affiliated → pending_* → none"""
        viewer = self._require_account(viewer_id)
        target = self._users.find_by_id(target_id)
        request = self._requests.find_between(viewer_id, target_id)
        return derive_status(viewer, target, request)

    # ── 내부 ─────────────────────────────────────────────────

    def _require_account(self, account_id: str) -> Account:
        account = self._users.find_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found")
        return account

    def _discard(self, request: AffiliationRequest, reason: str) -> None:
        """무효가 된 요청 삭제. 작업 성공 여부와 무관하게 커밋한다."""
        self._requests.delete(request.id)
        self._db.commit()
        logger.warning("Affiliation request %s discarded: %s", request.id, reason)

    def _reject_accept(
        self,
        request: AffiliationRequest,
        artist_id: str,
        shop_id: str,
        claimed: bool,
    ) -> None:
        """쓰기 단계에서 실패한 accept의 원인을 다시 읽어 판별하고 예외를 던진다.

        롤백 이후에 호출된다. 계정 삭제 → 요청 소멸 → CAS 패배 순으로 본다.
        """
        if len(self._users.summaries((artist_id, shop_id))) < 2:
            self._discard(request, "party no longer exists")
            raise NotFoundError("One or both users no longer exist")
        if not claimed:
            logger.info("Affiliation accept rejected: request %s already gone", request.id)
            raise NotFoundError("Request not found")
        # 다른 accept가 먼저 커밋됨
        self._discard(request, "lost affiliation race")
        raise InvalidArgumentError(MSG_ARTIST_TAKEN)

    def _view(self, request: AffiliationRequest, accounts: dict[str, Account]) -> RequestView:
        return RequestView(
            request=request,
            from_party=AccountSummary.of(accounts[request.from_id]),
            to_party=AccountSummary.of(accounts[request.to_id]),
        )
