"""Tests for authentication and JWT tokens."""

from datetime import timedelta
from unittest.mock import patch

from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from config import settings
from plugins.django_interface.models import User, VerificationToken
from quezi_core.adapters.security.hash_service import HashService
from quezi_core.adapters.security.jwt_service import JWTService
from tests.helpers.factories import DEFAULT_PASSWORD, auth_headers, make_user

JSON = "application/json"


@override_settings(BCRYPT_ROUNDS=4)
class RegisterTests(TestCase):
    def _payload(self, **overrides):
        data = {
            "name": "Maria Silva",
            "email": "Maria@Example.com",
            "password": DEFAULT_PASSWORD,
            "confirm_password": DEFAULT_PASSWORD,
            "phone": "(11) 98765-4321",
        }
        data.update(overrides)
        return data

    def test_register_creates_user_and_sets_cookie(self) -> None:
        resp = self.client.post(reverse("register"), self._payload(), content_type=JSON)

        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["user"]["email"], "maria@example.com")
        self.assertEqual(body["user"]["user_type"], "CLIENT")
        self.assertEqual(body["user"]["phone"], "11987654321")
        self.assertNotIn("password_hash", body["user"])

        cookie = resp.cookies.get(settings.AUTH_COOKIE_NAME)
        self.assertIsNotNone(cookie, "JWT cookie não encontrado")
        self.assertEqual(JWTService.decode_token(body["token"])["sub"], body["user"]["id"])

        user = User.objects.get(email="maria@example.com")
        self.assertTrue(HashService.verify(DEFAULT_PASSWORD, user.password_hash))
        self.assertTrue(
            VerificationToken.objects.filter(identifier=user.email, purpose="email_verification").exists()
        )

    def test_duplicate_email_conflicts(self) -> None:
        make_user("maria@example.com")
        resp = self.client.post(reverse("register"), self._payload(), content_type=JSON)

        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["message"], "Email já cadastrado")

    def test_invalid_payload_returns_validation_details(self) -> None:
        resp = self.client.post(
            reverse("register"),
            self._payload(password="fraca", confirm_password="fraca"),
            content_type=JSON,
        )

        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["error"], "ValidationError")
        self.assertEqual(body["statusCode"], 400)
        self.assertIn("password", [d["path"] for d in body["details"]])

    def test_admin_type_cannot_be_registered(self) -> None:
        resp = self.client.post(reverse("register"), self._payload(user_type="ADMIN"), content_type=JSON)
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(User.objects.exists())


@override_settings(BCRYPT_ROUNDS=4)
class LoginTests(TestCase):
    def test_login_returns_token_and_cookie(self) -> None:
        user = make_user("ana@example.com", user_type="PROFESSIONAL")

        resp = self.client.post(
            reverse("login"), {"email": "ANA@example.com", "password": DEFAULT_PASSWORD}, content_type=JSON
        )

        self.assertEqual(resp.status_code, 200)
        cookie = resp.cookies.get(settings.AUTH_COOKIE_NAME)
        self.assertIsNotNone(cookie, "JWT cookie não encontrado")
        payload = JWTService.decode_token(cookie.value)
        self.assertEqual(payload["sub"], str(user.id))
        self.assertEqual(payload["role"], "PROFESSIONAL")
        self.assertEqual(resp.json()["user"]["id"], str(user.id))

    def test_wrong_password_is_unauthorized(self) -> None:
        make_user("ana@example.com")
        resp = self.client.post(
            reverse("login"), {"email": "ana@example.com", "password": "Errada123"}, content_type=JSON
        )

        self.assertEqual(resp.status_code, 401)
        self.assertEqual(
            resp.json(),
            {"error": "Unauthorized", "message": "Email ou senha inválidos", "statusCode": 401},
        )

    def test_unknown_email_gets_same_message(self) -> None:
        resp = self.client.post(
            reverse("login"), {"email": "ninguem@example.com", "password": DEFAULT_PASSWORD}, content_type=JSON
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Email ou senha inválidos")

    def test_inactive_account_is_forbidden(self) -> None:
        make_user("ana@example.com", is_active=False)
        resp = self.client.post(
            reverse("login"), {"email": "ana@example.com", "password": DEFAULT_PASSWORD}, content_type=JSON
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Conta desativada")


@override_settings(BCRYPT_ROUNDS=4)
class SessionTests(TestCase):
    def setUp(self) -> None:
        self.user = make_user("ana@example.com")

    def test_me_with_bearer_token(self) -> None:
        resp = self.client.get(reverse("me"), headers=auth_headers(self.user))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "ana@example.com")

    def test_me_with_cookie_after_login(self) -> None:
        self.client.post(
            reverse("login"), {"email": "ana@example.com", "password": DEFAULT_PASSWORD}, content_type=JSON
        )
        resp = self.client.get(reverse("me"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], str(self.user.id))

    def test_me_without_token_is_unauthorized(self) -> None:
        resp = self.client.get(reverse("me"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["error"], "Unauthorized")
        self.assertEqual(resp.json()["statusCode"], 401)

    def test_expired_token_is_unauthorized(self) -> None:
        token = JWTService.create_token(subject=str(self.user.id), role="CLIENT", expires_in=-10)
        resp = self.client.get(reverse("me"), headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 401)

    def test_token_of_deactivated_user_is_rejected(self) -> None:
        headers = auth_headers(self.user)
        User.objects.filter(id=self.user.id).update(is_active=False)
        resp = self.client.get(reverse("me"), headers=headers)
        self.assertEqual(resp.status_code, 401)

    def test_logout_clears_cookie(self) -> None:
        resp = self.client.post(reverse("logout"), headers=auth_headers(self.user))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.cookies[settings.AUTH_COOKIE_NAME].value, "")

    def test_health_check_is_public(self) -> None:
        resp = self.client.get(reverse("healthz"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertIn("X-Request-ID", resp.headers)


@override_settings(BCRYPT_ROUNDS=4)
class PasswordResetTests(TestCase):
    def setUp(self) -> None:
        self.user = make_user("ana@example.com")

    def _request_reset(self, email: str):
        return self.client.post(reverse("forgot-password"), {"email": email}, content_type=JSON)

    def test_forgot_password_does_not_reveal_accounts(self) -> None:
        known = self._request_reset("ana@example.com")
        unknown = self._request_reset("ninguem@example.com")

        self.assertEqual(known.status_code, 200)
        self.assertEqual(unknown.status_code, 200)
        self.assertEqual(known.json(), unknown.json())
        self.assertEqual(
            VerificationToken.objects.filter(purpose="password_reset").count(), 1
        )

    def test_new_request_replaces_previous_token(self) -> None:
        self._request_reset("ana@example.com")
        first = VerificationToken.objects.get(purpose="password_reset").token
        self._request_reset("ana@example.com")

        tokens = list(VerificationToken.objects.filter(purpose="password_reset").values_list("token", flat=True))
        self.assertEqual(len(tokens), 1)
        self.assertNotEqual(tokens[0], first)

    def test_verify_and_reset_password(self) -> None:
        self._request_reset("ana@example.com")
        token = VerificationToken.objects.get(purpose="password_reset").token

        check = self.client.post(reverse("verify-reset-token"), {"token": token}, content_type=JSON)
        self.assertEqual(check.json(), {"valid": True, "message": "Token válido"})

        resp = self.client.post(
            reverse("reset-password"),
            {"token": token, "password": "NovaSenha1", "confirm_password": "NovaSenha1"},
            content_type=JSON,
        )
        self.assertEqual(resp.status_code, 200)

        self.user.refresh_from_db()
        self.assertTrue(HashService.verify("NovaSenha1", self.user.password_hash))
        self.assertFalse(VerificationToken.objects.filter(token=token).exists())

        reused = self.client.post(
            reverse("reset-password"),
            {"token": token, "password": "OutraSenha1", "confirm_password": "OutraSenha1"},
            content_type=JSON,
        )
        self.assertEqual(reused.status_code, 400)
        self.assertEqual(reused.json()["message"], "Token inválido ou expirado")

    def test_expired_token_is_invalid(self) -> None:
        self._request_reset("ana@example.com")
        token = VerificationToken.objects.get(purpose="password_reset")
        VerificationToken.objects.filter(id=token.id).update(expires_at=timezone.now() - timedelta(minutes=1))

        check = self.client.post(reverse("verify-reset-token"), {"token": token.token}, content_type=JSON)
        self.assertEqual(check.status_code, 200)
        self.assertEqual(check.json(), {"valid": False, "error": "Token inválido ou expirado"})

    def test_reset_link_is_logged_for_delivery(self) -> None:
        with patch("quezi_core.adapters.notifications.event_subscribers.logger") as logger:
            self._request_reset("ana@example.com")

        token = VerificationToken.objects.get(purpose="password_reset").token
        kwargs = logger.info.call_args.kwargs
        self.assertEqual(kwargs["to"], "ana@example.com")
        self.assertTrue(kwargs["link"].endswith(f"/reset-password?token={token}"))


@override_settings(BCRYPT_ROUNDS=4)
class VerifyEmailTests(TestCase):
    def test_verification_token_marks_email_verified(self) -> None:
        self.client.post(
            reverse("register"),
            {
                "name": "Maria Silva",
                "email": "maria@example.com",
                "password": DEFAULT_PASSWORD,
                "confirm_password": DEFAULT_PASSWORD,
            },
            content_type=JSON,
        )
        token = VerificationToken.objects.get(purpose="email_verification").token

        resp = self.client.post(reverse("verify-email"), {"token": token}, content_type=JSON)

        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["user"]["is_email_verified"])
        self.assertFalse(VerificationToken.objects.filter(token=token).exists())

    def test_unknown_token_is_rejected(self) -> None:
        resp = self.client.post(reverse("verify-email"), {"token": "nao-existe"}, content_type=JSON)
        self.assertEqual(resp.status_code, 400)
