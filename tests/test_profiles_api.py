"""Tests for /api/v1/profiles."""

from tests.conftest import ALICE, BOB, CAROL, auth_headers

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestGetProfile:
    def test_my_profile(self, client):
        response = client.get("/api/v1/profiles/me", headers=auth_headers(ALICE))
        assert response.status_code == 200
        assert response.json()["user_id"] == ALICE

    def test_my_profile_missing(self, client, db):
        db.tables["profiles"] = [p for p in db.tables["profiles"] if p["user_id"] != ALICE]
        response = client.get("/api/v1/profiles/me", headers=auth_headers(ALICE))
        assert response.status_code == 404

    def test_public_profile_visible(self, client):
        response = client.get(f"/api/v1/profiles/{BOB}", headers=auth_headers(ALICE))
        assert response.status_code == 200
        assert response.json()["display_name"] == "Bob"

    def test_private_profile_hidden_from_others(self, client):
        client.put("/api/v1/profiles/me", json={"is_public": False}, headers=auth_headers(CAROL))

        response = client.get(f"/api/v1/profiles/{CAROL}", headers=auth_headers(ALICE))
        assert response.status_code == 404

        response = client.get(f"/api/v1/profiles/{CAROL}", headers=auth_headers(CAROL))
        assert response.status_code == 200


class TestSaveProfile:
    def test_update_fields(self, client, db):
        response = client.put(
            "/api/v1/profiles/me",
            json={"display_name": "Alice L.", "location": "Lisbon", "availability": "Weekends"},
            headers=auth_headers(ALICE),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["display_name"] == "Alice L."
        assert body["location"] == "Lisbon"
        assert body["is_public"] is True
        assert len([p for p in db.rows("profiles") if p["user_id"] == ALICE]) == 1

    def test_creates_missing_profile(self, client, db):
        db.tables["profiles"] = [p for p in db.tables["profiles"] if p["user_id"] != ALICE]
        response = client.put("/api/v1/profiles/me", json={"display_name": "Alice"}, headers=auth_headers(ALICE))
        assert response.status_code == 200
        assert response.json()["user_id"] == ALICE


class TestAvatarUpload:
    def test_upload_stores_under_user_folder(self, client, db):
        response = client.post(
            "/api/v1/profiles/me/avatar",
            files={"file": ("me.png", PNG, "image/png")},
            headers=auth_headers(ALICE),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["path"] == f"{ALICE}/avatar.png"
        assert ("avatars", f"{ALICE}/avatar.png") in db.storage.objects
        profile = client.get("/api/v1/profiles/me", headers=auth_headers(ALICE)).json()
        assert profile["avatar_url"] == body["avatar_url"]

    def test_client_filename_does_not_pick_the_key(self, client, db):
        response = client.post(
            "/api/v1/profiles/me/avatar",
            files={"file": ("x./../shell.html", PNG, "image/png")},
            headers=auth_headers(ALICE),
        )
        assert response.status_code == 200
        assert response.json()["path"] == f"{ALICE}/avatar.png"
        assert list(db.storage.objects) == [("avatars", f"{ALICE}/avatar.png")]

    def test_rejects_non_images(self, client, db):
        response = client.post(
            "/api/v1/profiles/me/avatar",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers(ALICE),
        )
        assert response.status_code == 400
        assert db.storage.objects == {}
