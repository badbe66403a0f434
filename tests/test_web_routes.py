"""HTTP tests: login/logout/register flow, route gating, admin users and orders endpoints."""

import unittest
from decimal import Decimal
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from app.core.database import create_db_engine, get_db
from app.core.security import hash_password
from app.main import app
from app.models import Base, Order
from app.schemas.auth import AccountDraft, Role
from app.services.account_store import SqlAccountStore


class WebTestCase(unittest.TestCase):
    """Runs the real app against a fresh in-memory SQLite database."""

    def setUp(self) -> None:
        patcher = patch("app.core.security.BCRYPT_ROUNDS", 4)
        patcher.start()
        self.addCleanup(patcher.stop)

        engine = create_db_engine("sqlite://")
        Base.metadata.create_all(engine)
        self.addCleanup(engine.dispose)
        self.Session = sessionmaker(bind=engine, autoflush=False)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def create_account(self, username: str, password: str, role: Role = Role.USER) -> int:
        db = self.Session()
        try:
            account = SqlAccountStore(db).create(
                AccountDraft(username=username, password_hash=hash_password(password), role=role)
            )
        finally:
            db.close()
        return account.id

    def login(self, username: str, password: str):
        return self.client.post(
            "/login",
            data={"username": username, "password": password},
            follow_redirects=False,
        )


class TestLoginFlow(WebTestCase):
    def test_login_page_is_public(self) -> None:
        r = self.client.get("/login")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"view": "login", "error": None, "message": None})

    def test_login_page_banners(self) -> None:
        self.assertEqual(self.client.get("/login?error").json()["error"], "Invalid username or password")
        self.assertEqual(
            self.client.get("/login?logout").json()["message"],
            "You have been successfully logged out",
        )

    def test_successful_login_redirects_to_landing(self) -> None:
        self.create_account("alice", "pw1")
        r = self.login("alice", "pw1")
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/orders")
        self.assertEqual(self.client.get("/orders").status_code, 200)

    def test_failures_redirect_to_same_error(self) -> None:
        self.create_account("alice", "pw1")
        wrong_password = self.login("alice", "nope")
        unknown_user = self.login("bob", "pw1")
        missing = self.client.post("/login", data={}, follow_redirects=False)
        for r in (wrong_password, unknown_user, missing):
            self.assertEqual(r.status_code, 303)
            self.assertEqual(r.headers["location"], "/login?error")
        self.assertEqual(self.client.get("/orders", follow_redirects=False).status_code, 303)

    def test_logout_clears_session(self) -> None:
        self.create_account("alice", "pw1")
        self.login("alice", "pw1")
        r = self.client.post("/logout", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/login?logout")
        r = self.client.get("/orders", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/login")

    def test_disabled_account_loses_session(self) -> None:
        alice_id = self.create_account("alice", "pw1")
        self.login("alice", "pw1")
        db = self.Session()
        try:
            store = SqlAccountStore(db)
            account = store.find_by_id(alice_id)
            store.update(account.model_copy(update={"enabled": False}))
        finally:
            db.close()
        self.assertEqual(self.client.get("/orders", follow_redirects=False).status_code, 303)
        self.assertEqual(self.login("alice", "pw1").headers["location"], "/login?error")


class TestRegistration(WebTestCase):
    def _register(self, username: str, password: str, confirm: str):
        return self.client.post(
            "/register",
            data={"username": username, "password": password, "confirmPassword": confirm},
            follow_redirects=False,
        )

    def test_register_page_is_public(self) -> None:
        self.assertEqual(self.client.get("/register").json()["view"], "register")

    def test_register_then_login(self) -> None:
        r = self._register("alice", "pw1", "pw1")
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/login")
        self.assertEqual(self.login("alice", "pw1").headers["location"], "/orders")

    def test_failure_reasons(self) -> None:
        cases = [
            (("", "pw1", "pw1"), 400, "missing_fields"),
            (("alice", "pw1", "pw2"), 400, "password_mismatch"),
            (("alice", "x" * 73, "x" * 73), 400, "password_too_long"),
        ]
        for (username, password, confirm), status_code, code in cases:
            with self.subTest(code=code):
                r = self._register(username, password, confirm)
                self.assertEqual(r.status_code, status_code)
                self.assertEqual(r.json()["code"], code)
                self.assertEqual(r.json()["view"], "register")

    def test_register_twice(self) -> None:
        self._register("alice", "pw1", "pw1")
        r = self._register("alice", "pw1", "pw1")
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["code"], "username_taken")
        db = self.Session()
        try:
            self.assertEqual([a.username for a in SqlAccountStore(db).get_all()], ["alice"])
        finally:
            db.close()

    def test_registered_account_is_plain_user(self) -> None:
        self._register("alice", "pw1", "pw1")
        self.login("alice", "pw1")
        self.assertEqual(self.client.get("/admin/users").status_code, 403)


class TestAdminUsers(WebTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_id = self.create_account("root", "toor", Role.ADMIN)
        self.alice_id = self.create_account("alice", "pw1")

    def test_anonymous_redirected(self) -> None:
        r = self.client.get("/admin/users", follow_redirects=False)
        self.assertEqual(r.status_code, 303)
        self.assertEqual(r.headers["location"], "/login")

    def test_user_forbidden(self) -> None:
        self.login("alice", "pw1")
        r = self.client.get("/admin/users")
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json(), {"code": "forbidden", "error": "Admin access required."})
        self.assertEqual(self.client.delete(f"/admin/users/{self.admin_id}").status_code, 403)

    def test_admin_lists_users_without_hashes(self) -> None:
        self.login("root", "toor")
        r = self.client.get("/admin/users")
        self.assertEqual(r.status_code, 200)
        users = r.json()["users"]
        self.assertEqual([u["username"] for u in users], ["root", "alice"])
        self.assertTrue(all("password_hash" not in u for u in users))

    def test_edit_keeps_password(self) -> None:
        self.login("root", "toor")
        r = self.client.put(
            f"/admin/users/{self.alice_id}",
            json={"username": "alice2", "role": "admin"},
        )
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["role"], "admin")
        self.client.post("/logout")
        self.assertEqual(self.login("alice2", "pw1").headers["location"], "/orders")

    def test_edit_errors(self) -> None:
        self.login("root", "toor")
        r = self.client.put("/admin/users/999", json={"username": "x", "role": "user"})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json()["code"], "not_found")
        r = self.client.put(f"/admin/users/{self.alice_id}", json={"username": "root", "role": "user"})
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["code"], "duplicate_username")
        r = self.client.put(f"/admin/users/{self.alice_id}", json={"username": "   ", "role": "user"})
        self.assertEqual(r.status_code, 422)
        self.assertEqual(self.client.get(f"/admin/users/{self.alice_id}").json()["username"], "alice")

    def test_delete(self) -> None:
        self.login("root", "toor")
        self.assertEqual(self.client.delete(f"/admin/users/{self.alice_id}").status_code, 204)
        self.assertEqual(self.client.get(f"/admin/users/{self.alice_id}").status_code, 404)
        self.assertEqual(self.client.delete(f"/admin/users/{self.alice_id}").status_code, 404)

    def test_delete_blocked_by_orders(self) -> None:
        db = self.Session()
        try:
            db.add(
                Order(
                    order_number="SO-1",
                    product_name="Widget",
                    price=Decimal("1.00"),
                    quantity=1,
                    created_by=self.alice_id,
                )
            )
            db.commit()
        finally:
            db.close()
        self.login("root", "toor")
        r = self.client.delete(f"/admin/users/{self.alice_id}")
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["code"], "constraint_violation")
        self.assertEqual(self.client.get(f"/admin/users/{self.alice_id}").status_code, 200)

    def test_storage_failure_is_generic(self) -> None:
        self.login("root", "toor")
        failure = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with patch("app.services.account_store.SqlAccountStore.get_all", side_effect=failure):
            r = self.client.get("/admin/users")
        self.assertEqual(r.status_code, 503)
        self.assertEqual(r.json()["error"], "Something went wrong. Please try again later.")
        self.assertNotIn("disk", r.text)


class TestOrders(WebTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice_id = self.create_account("alice", "pw1")
        self.login("alice", "pw1")

    def _payload(self, **kwargs: object) -> dict:
        payload = {"order_number": "SO-1", "product_name": "Widget", "price": "9.99", "quantity": 2}
        payload.update(kwargs)
        return payload

    def test_create_and_show(self) -> None:
        r = self.client.post("/orders", json=self._payload(id=99))
        self.assertEqual(r.status_code, 201)
        order = r.json()
        self.assertNotEqual(order["id"], 99)
        self.assertEqual(order["created_by"], self.alice_id)
        self.assertEqual(Decimal(order["price"]), Decimal("9.99"))

        shown = self.client.get(f"/orders/{order['id']}").json()
        self.assertEqual(shown["product_name"], "Widget")
        self.assertEqual(len(self.client.get("/orders").json()["orders"]), 1)

    def test_edit_and_delete(self) -> None:
        order_id = self.client.post("/orders", json=self._payload()).json()["id"]
        r = self.client.put(f"/orders/{order_id}", json=self._payload(quantity=5))
        self.assertEqual(r.json()["quantity"], 5)
        self.assertEqual(self.client.delete(f"/orders/{order_id}").status_code, 204)
        self.assertEqual(self.client.get(f"/orders/{order_id}").status_code, 404)
        self.assertEqual(self.client.delete(f"/orders/{order_id}").status_code, 404)

    def test_validation(self) -> None:
        r = self.client.post("/orders", json=self._payload(quantity=-1))
        self.assertEqual(r.status_code, 422)

    def test_anonymous_cannot_create(self) -> None:
        self.client.post("/logout")
        r = self.client.post("/orders", json=self._payload(), follow_redirects=False)
        self.assertEqual(r.status_code, 303)


class TestHealth(WebTestCase):
    def test_public_health(self) -> None:
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["status"], "ok")
        self.assertEqual(r.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
