"""Account / Follow Service 테스트"""

import pytest
from sqlalchemy.orm import Session

from inkhub.core.account.models import ArtistProfile, Role, ShopProfile
from inkhub.core.errors import InvalidArgumentError, NotFoundError
from inkhub.services.account_service import AccountService
from inkhub.services.affiliation_service import AffiliationService
from inkhub.services.follow_service import FollowService


@pytest.fixture()
def accounts(db_session: Session) -> AccountService:
    return AccountService(db_session)


@pytest.fixture()
def follows(db_session: Session) -> FollowService:
    return FollowService(db_session)


class TestRegister:
    def test_artist_profile(self, accounts):
        account = accounts.register(
            "ink_master",
            "ink@example.com",
            "artist",
            profile_fields={"bio": "hi", "price_range": "$$", "styles": ["fineline"]},
        )
        loaded = accounts.get_account(account.id)
        assert loaded.role == Role.ARTIST
        assert isinstance(loaded.profile, ArtistProfile)
        assert loaded.profile.price_range == "$$"
        assert loaded.profile.styles == ["fineline"]
        assert loaded.shop_link is None
        assert loaded.created_at is not None

    def test_shop_profile_ignores_artist_fields(self, accounts):
        account = accounts.register(
            "studio",
            "studio@example.com",
            "shop",
            profile_fields={"hours": "10-20", "price_range": "$$$$"},
        )
        loaded = accounts.get_account("studio")
        assert loaded.id == account.id
        assert isinstance(loaded.profile, ShopProfile)
        assert loaded.profile.hours == "10-20"

    def test_duplicate_email(self, accounts):
        accounts.register("a", "same@example.com", "enthusiast")
        with pytest.raises(InvalidArgumentError, match="Email already in use"):
            accounts.register("b", "same@example.com", "enthusiast")

    def test_duplicate_username(self, accounts):
        accounts.register("a", "a@example.com", "enthusiast")
        with pytest.raises(InvalidArgumentError, match="Username already taken"):
            accounts.register("a", "other@example.com", "enthusiast")

    def test_username_format(self, accounts):
        with pytest.raises(InvalidArgumentError, match="letters, numbers, and underscores"):
            accounts.register("bad name!", "x@example.com", "enthusiast")

    def test_invalid_role(self, accounts):
        with pytest.raises(InvalidArgumentError, match="Invalid user type"):
            accounts.register("x", "x@example.com", "admin")

    def test_invalid_price_range(self, accounts):
        with pytest.raises(InvalidArgumentError, match="Invalid price range"):
            accounts.register(
                "x", "x@example.com", "artist", profile_fields={"price_range": "cheap"}
            )


class TestLookup:
    def test_not_found(self, accounts):
        with pytest.raises(NotFoundError):
            accounts.get_account("nobody")

    def test_shop_artists(self, accounts, make_account, db_session):
        shop = make_account("shop1", "shop")
        for name in ("zed", "amy"):
            artist = make_account(name, "artist")
            affiliation = AffiliationService(db_session)
            view = affiliation.send_request(artist.id, shop.id)
            affiliation.accept_request(shop.id, view.request.id)

        names = [s.username for s in accounts.get_shop_artists(shop.id)]
        assert names == ["amy", "zed"]

    def test_shop_artists_requires_shop(self, accounts, make_account):
        fan = make_account("fan1", "enthusiast")
        with pytest.raises(InvalidArgumentError):
            accounts.get_shop_artists(fan.id)


class TestFollow:
    def test_follow_and_unfollow(self, follows, make_account, accounts):
        a = make_account("a", "enthusiast")
        b = make_account("b", "artist")

        follows.follow(a.id, b.id)
        assert [s.username for s in follows.get_followers(b.id)] == ["a"]
        assert [s.username for s in follows.get_following(a.id)] == ["b"]
        assert accounts.get_account(b.id).followers == {a.id}

        follows.unfollow(a.id, b.id)
        assert follows.get_followers(b.id) == []

    def test_self_follow(self, follows, make_account):
        a = make_account("a", "enthusiast")
        with pytest.raises(InvalidArgumentError, match="cannot follow yourself"):
            follows.follow(a.id, a.id)

    def test_follow_missing(self, follows, make_account):
        a = make_account("a", "enthusiast")
        with pytest.raises(NotFoundError):
            follows.follow(a.id, "missing")

    def test_already_following(self, follows, make_account):
        a = make_account("a", "enthusiast")
        b = make_account("b", "shop")
        follows.follow(a.id, b.id)
        with pytest.raises(InvalidArgumentError, match="Already following"):
            follows.follow(a.id, b.id)

    def test_unfollow_not_following(self, follows, make_account):
        a = make_account("a", "enthusiast")
        b = make_account("b", "shop")
        with pytest.raises(InvalidArgumentError, match="Not following"):
            follows.unfollow(a.id, b.id)

    def test_delete_account_removes_follows(self, follows, make_account, accounts):
        a = make_account("a", "enthusiast")
        b = make_account("b", "shop")
        follows.follow(a.id, b.id)

        accounts.delete_account(a.id)

        assert follows.get_followers(b.id) == []
