"""아티스트–샵 소속 도메인 모델 (DB 무관)

상태 머신 (아티스트/샵 쌍 단위):
    NONE --send--> PENDING --accept(수신자)--> AFFILIATED
    PENDING --decline(양측)--> NONE
    AFFILIATED --remove(양측)--> NONE
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from inkhub.core.account.models import AccountSummary


class AffiliationStatus(str, Enum):
    """(조회자, 대상) 쌍 기준 관계 상태"""

    NONE = "none"
    PENDING_SENT = "pending_sent"
    PENDING_RECEIVED = "pending_received"
    AFFILIATED = "affiliated"


@dataclass
class AffiliationRequest:
    """대기 중인 소속 제안. from_id는 제안자이며 역할과 무관하다."""

    id: str
    from_id: str
    to_id: str
    created_at: Optional[datetime] = None

    def involves(self, user_id: str) -> bool:
        return user_id in (self.from_id, self.to_id)


@dataclass
class RequestView:
    """양측 표시 정보가 채워진 요청"""

    request: AffiliationRequest
    from_party: AccountSummary
    to_party: AccountSummary


@dataclass
class AffiliationLink:
    """accept 결과: 연결된 아티스트와 샵"""

    artist_id: str
    shop_id: str


@dataclass
class StatusView:
    """get_affiliation_status 결과"""

    status: AffiliationStatus
    request_id: Optional[str] = None
