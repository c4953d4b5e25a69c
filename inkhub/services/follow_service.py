"""팔로우 Service"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkhub.core.account.models import AccountSummary
from inkhub.core.errors import InvalidArgumentError, NotFoundError
from inkhub.db.stores import UserDirectory

logger = logging.getLogger(__name__)


class FollowService:
    def __init__(self, db: Session, users: Optional[UserDirectory] = None) -> None:
        self._db = db
        self._users = users or UserDirectory(db)

    def follow(self, actor_id: str, target_id: str) -> None:
        if actor_id == target_id:
            raise InvalidArgumentError("You cannot follow yourself")

        target = self._users.find_by_id(target_id)
        if target is None:
            raise NotFoundError("User not found")

        if self._users.find_by_id(actor_id) is None:
            raise NotFoundError("User not found")

        if actor_id in target.followers:
            raise InvalidArgumentError("Already following this user")

        try:
            self._users.add_follow(actor_id, target_id)
            self._db.commit()
        except IntegrityError:
            # 동시 요청이 먼저 기록함
            self._db.rollback()
            raise InvalidArgumentError("Already following this user")

        logger.info("Follow: %s -> %s", actor_id, target_id)

    def unfollow(self, actor_id: str, target_id: str) -> None:
        if actor_id == target_id:
            raise InvalidArgumentError("You cannot unfollow yourself")

        target = self._users.find_by_id(target_id)
        if target is None:
            raise NotFoundError("User not found")

        if actor_id not in target.followers:
            raise InvalidArgumentError("Not following this user")

        self._users.remove_follow(actor_id, target_id)
        self._db.commit()
        logger.info("Unfollow: %s -> %s", actor_id, target_id)

    def get_followers(self, account_id: str) -> list[AccountSummary]:
        account = self._users.find_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found")
        return self._sorted(account.followers)

    def get_following(self, account_id: str) -> list[AccountSummary]:
        account = self._users.find_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found")
        return self._sorted(account.following)

    def _sorted(self, ids: set[str]) -> list[AccountSummary]:
        return sorted(self._users.summaries(ids).values(), key=lambda s: s.username)
