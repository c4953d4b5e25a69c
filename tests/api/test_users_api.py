"""User API 엔드포인트 테스트"""

from fastapi.testclient import TestClient


class TestUsersAPI:
    def test_register_and_lookup(self, client: TestClient):
        created = client.post(
            "/api/users",
            json={
                "username": "ink_master",
                "email": "ink@example.com",
                "user_type": "artist",
                "price_range": "$$",
                "styles": ["traditional"],
            },
        )
        assert created.status_code == 201
        data = created.json()
        assert data["user_type"] == "artist"
        assert data["price_range"] == "$$"
        assert data["shop_id"] is None
        assert data["artist_ids"] is None

        by_name = client.get("/api/users/ink_master")
        assert by_name.status_code == 200
        assert by_name.json()["id"] == data["id"]

    def test_register_invalid_type(self, client: TestClient):
        response = client.post(
            "/api/users",
            json={"username": "x", "email": "x@example.com", "user_type": "admin"},
        )
        assert response.status_code == 400
        assert response.json() == {"kind": "invalid_argument", "message": "Invalid user type"}

    def test_unknown_user(self, client: TestClient):
        assert client.get("/api/users/nobody").status_code == 404

    def test_follow_roundtrip(self, client: TestClient):
        a = client.post(
            "/api/users",
            json={"username": "a", "email": "a@example.com", "user_type": "enthusiast"},
        ).json()["id"]
        b = client.post(
            "/api/users",
            json={"username": "b", "email": "b@example.com", "user_type": "shop"},
        ).json()["id"]

        response = client.put(f"/api/users/follow/{b}", headers={"X-User-Id": a})
        assert response.status_code == 200
        followers = client.get(f"/api/users/{b}/followers").json()
        assert [f["username"] for f in followers] == ["a"]
        assert client.get(f"/api/users/{b}").json()["followers_count"] == 1

        again = client.put(f"/api/users/follow/{b}", headers={"X-User-Id": a})
        assert again.status_code == 400

        response = client.put(f"/api/users/unfollow/{b}", headers={"X-User-Id": a})
        assert response.status_code == 200
        assert client.get(f"/api/users/{a}/following").json() == []

    def test_delete_me(self, client: TestClient):
        a = client.post(
            "/api/users",
            json={"username": "a", "email": "a@example.com", "user_type": "enthusiast"},
        ).json()["id"]
        response = client.delete("/api/users/me", headers={"X-User-Id": a})
        assert response.status_code == 200
        assert client.get(f"/api/users/{a}").status_code == 404
