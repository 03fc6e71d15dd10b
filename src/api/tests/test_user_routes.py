"""Tests for /users CRUD routes."""

import unittest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from adapter.fake.password_hasher import FakePasswordHasher
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import get_password_hasher, get_user_repo
from api.main import app
from domain.model.errors import StoreError

NEW_USER = {
    "username": "john",
    "first_name": "John",
    "last_name": "Doe",
    "email": "john@x.com",
    "password": "secret1",
    "signup_method": "local",
}


class UserRouteTestCase(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.repo = FakeUserRepository()
        self.hasher = FakePasswordHasher()
        app.dependency_overrides[get_user_repo] = lambda: self.repo
        app.dependency_overrides[get_password_hasher] = lambda: self.hasher

    def tearDown(self):
        app.dependency_overrides.clear()

    def create(self, **overrides) -> dict:
        payload = {**NEW_USER, **overrides}
        response = self.client.post("/users", json=payload)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]


class TestCreateUser(UserRouteTestCase):

    def test_create_user(self):
        data = self.create()

        self.assertEqual(data["username"], "john")
        self.assertFalse(data["email_verified"])
        self.assertNotIn("password_hash", data)

    def test_create_rejects_unknown_signup_method(self):
        response = self.client.post("/users", json={**NEW_USER, "signup_method": "facebook"})
        self.assertEqual(response.status_code, 422)

    def test_create_duplicate_returns_409(self):
        self.create()
        response = self.client.post("/users", json={**NEW_USER, "email": "other@x.com"})
        self.assertEqual(response.status_code, 409)


class TestReadUsers(UserRouteTestCase):

    def test_list_users(self):
        self.create()
        self.create(username="jane", email="jane@x.com")

        response = self.client.get("/users")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["meta"], {"total": 2, "limit": 20, "offset": 0})
        self.assertEqual({u["username"] for u in body["data"]}, {"john", "jane"})
        self.assertNotIn("password_hash", response.text)

    def test_list_users_paginates(self):
        self.create()
        self.create(username="jane", email="jane@x.com")

        first = self.client.get("/users", params={"limit": 1}).json()
        past_end = self.client.get("/users", params={"limit": 1, "offset": 2}).json()

        self.assertEqual(len(first["data"]), 1)
        self.assertEqual(first["meta"], {"total": 2, "limit": 1, "offset": 0})
        self.assertEqual(past_end["data"], [])
        self.assertEqual(past_end["meta"]["total"], 2)

    def test_list_users_rejects_out_of_range_paging(self):
        for params in ({"limit": 0}, {"limit": 101}, {"offset": -1}, {"limit": "many"}):
            response = self.client.get("/users", params=params)
            self.assertEqual(response.status_code, 422, params)

    def test_get_user(self):
        created = self.create()

        response = self.client.get(f"/users/{created['id']}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], created)

    def test_get_missing_user_returns_404(self):
        response = self.client.get("/users/nonexistent")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"status": 404, "message": "User not found", "data": None})


class TestUpdateUser(UserRouteTestCase):

    def test_partial_update(self):
        created = self.create()

        response = self.client.put(f"/users/{created['id']}", json={"last_name": "Smith"})

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["first_name"], "John")
        self.assertEqual(data["last_name"], "Smith")
        self.assertEqual(data["created_at"], created["created_at"])

    def test_password_update_changes_login(self):
        created = self.create()

        self.client.put(f"/users/{created['id']}", json={"password": "new-secret"})

        ok = self.client.post("/auth/login", json={"email": "john@x.com", "password": "new-secret"})
        old = self.client.post("/auth/login", json={"email": "john@x.com", "password": "secret1"})
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(old.status_code, 401)

    def test_update_missing_user_returns_404(self):
        response = self.client.put("/users/nonexistent", json={"first_name": "X"})
        self.assertEqual(response.status_code, 404)

    def test_update_to_taken_email_returns_409(self):
        self.create()
        jane = self.create(username="jane", email="jane@x.com")

        response = self.client.put(f"/users/{jane['id']}", json={"email": "john@x.com"})

        self.assertEqual(response.status_code, 409)


class TestDeleteUser(UserRouteTestCase):

    def test_delete_is_idempotent(self):
        created = self.create()

        first = self.client.delete(f"/users/{created['id']}")
        second = self.client.delete(f"/users/{created['id']}")

        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 200)
        self.assertEqual(second.json()["message"], "User deleted")
        self.assertEqual(self.client.get(f"/users/{created['id']}").status_code, 404)


class TestStoreFailure(UserRouteTestCase):

    def test_store_error_maps_to_503(self):
        failing_repo = MagicMock()
        failing_repo.list_all.side_effect = StoreError("Failed to list users")
        app.dependency_overrides[get_user_repo] = lambda: failing_repo

        response = self.client.get("/users")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["message"], "Service unavailable")


if __name__ == '__main__':
    unittest.main()
