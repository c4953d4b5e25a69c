"""소속 Core 패키지 — 공개 API"""

from inkhub.core.affiliation.models import (
    AffiliationLink,
    AffiliationRequest,
    AffiliationStatus,
    RequestView,
    StatusView,
)
from inkhub.core.affiliation.rules import (
    derive_status,
    is_affiliated,
    pair_key,
    require_pair,
    resolve_pair,
    validate_accept_actor,
    validate_decline_actor,
    validate_remove,
    validate_send,
)

__all__ = [
    "AffiliationLink",
    "AffiliationRequest",
    "AffiliationStatus",
    "RequestView",
    "StatusView",
    "derive_status",
    "is_affiliated",
    "pair_key",
    "require_pair",
    "resolve_pair",
    "validate_accept_actor",
    "validate_decline_actor",
    "validate_remove",
    "validate_send",
]
