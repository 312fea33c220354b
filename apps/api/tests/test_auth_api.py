"""Token issuance and request identity API tests."""

from __future__ import annotations

from datetime import timedelta
import unittest

from fastapi.testclient import TestClient

from app.adapters.auth.jwt_auth import JwtTokenVerifier
from app.core.config import Settings
from app.main import create_app


class AuthApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = Settings(token_secret="auth-test-secret", storage_backend="memory", token_ttl_seconds=900)
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)

    def _issue(self, subject: str) -> str:
        verifier = JwtTokenVerifier(self.settings.token_secret)
        return verifier.issue_token(subject, timedelta(minutes=5))

    def test_issue_token_sets_cookie_header_and_body(self) -> None:
        response = self.client.post("/auth/token", json={"username": "alice"})

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(set(body), {"token", "expiresIn"})
        self.assertEqual(body["expiresIn"], 900)
        self.assertEqual(response.headers["Authorization"], f"Bearer {body['token']}")

        set_cookie = response.headers["set-cookie"]
        self.assertIn(f"authorization={body['token']}", set_cookie)
        self.assertIn("HttpOnly", set_cookie)
        self.assertIn("Max-Age=900", set_cookie)

        identity = self.app.state.token_verifier.verify_token(body["token"])
        self.assertIsNotNone(identity)
        assert identity is not None
        self.assertEqual(identity.subject, "alice")

    def test_user_resolves_from_issued_cookie(self) -> None:
        self.client.post("/auth/token", json={"username": "alice"})

        response = self.client.get("/user")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"subject": "alice"})

    def test_user_resolves_from_bearer_header(self) -> None:
        token = self._issue("bob")
        for header in (f"Bearer {token}", token):
            with self.subTest(header=header):
                response = self.client.get("/user", headers={"Authorization": header})
                self.assertEqual(response.json(), {"subject": "bob"})

    def test_anonymous_or_invalid_tokens_resolve_to_null(self) -> None:
        self.assertIsNone(self.client.get("/user").json())

        response = self.client.get("/user", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json())

        foreign = JwtTokenVerifier("some-other-secret").issue_token("mallory", timedelta(minutes=5))
        self.assertIsNone(self.client.get("/user", headers={"Authorization": f"Bearer {foreign}"}).json())

    def test_cookie_takes_precedence_over_header(self) -> None:
        self.client.cookies.set("authorization", self._issue("alice"))

        response = self.client.get("/user", headers={"Authorization": f"Bearer {self._issue('bob')}"})

        self.assertEqual(response.json(), {"subject": "alice"})

    def test_invalid_cookie_falls_back_to_header(self) -> None:
        self.client.cookies.set("authorization", "stale-token")

        response = self.client.get("/user", headers={"Authorization": f"Bearer {self._issue('bob')}"})

        self.assertEqual(response.json(), {"subject": "bob"})

    def test_clearing_token_removes_cookie(self) -> None:
        self.client.post("/auth/token", json={"username": "alice"})
        self.assertEqual(self.client.get("/user").json(), {"subject": "alice"})

        response = self.client.delete("/auth/token")

        self.assertEqual(response.status_code, 204)
        self.assertIn("Max-Age=0", response.headers["set-cookie"])
        self.assertIsNone(self.client.get("/user").json())

    def test_issue_token_requires_username(self) -> None:
        for payload in ({}, {"username": ""}):
            with self.subTest(payload=payload):
                response = self.client.post("/auth/token", json=payload)
                self.assertEqual(response.status_code, 400)
                self.assertNotIn("set-cookie", response.headers)

    def test_whitespace_only_username_is_rejected(self) -> None:
        for username in ("   ", "\t", " \n "):
            with self.subTest(username=username):
                response = self.client.post("/auth/token", json={"username": username})
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["code"], 400)
                self.assertNotIn("set-cookie", response.headers)
                self.assertNotIn("Authorization", response.headers)

        self.assertIsNone(self.client.get("/user").json())

    def test_issued_username_resolves_to_same_subject(self) -> None:
        for username in ("alice", " padded ", "user 42"):
            with self.subTest(username=username):
                token = self.client.post("/auth/token", json={"username": username}).json()["token"]
                response = self.client.get("/user", headers={"Authorization": f"Bearer {token}"})
                self.assertEqual(response.json(), {"subject": username})

    def test_invalid_tokens_never_block_movie_requests(self) -> None:
        response = self.client.get("/movies", headers={"Authorization": "Bearer expired.or.bogus"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])
