"""Tests for user management, admin stats and the seed_admin command."""

from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase, override_settings

from plugins.django_interface.models import Appointment, User
from quezi_core.adapters.security.hash_service import HashService
from tests.helpers.factories import (
    auth_headers,
    make_appointment,
    make_organization,
    make_review,
    make_user,
)

JSON = "application/json"


@override_settings(BCRYPT_ROUNDS=4)
class UserEndpointTests(TestCase):
    def setUp(self) -> None:
        self.admin = make_user("admin@example.com", name="Admin Quezi", user_type="ADMIN")
        self.client_user = make_user("cliente@example.com", name="Carla Cliente")
        self.professional = make_user("pro@example.com", name="Paula Pro", user_type="PROFESSIONAL")

    def test_list_requires_admin(self) -> None:
        resp = self.client.get("/api/users/", headers=auth_headers(self.client_user))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["error"], "Forbidden")

    def test_admin_lists_with_filters_and_pagination(self) -> None:
        resp = self.client.get(
            "/api/users/", {"user_type": "PROFESSIONAL"}, headers=auth_headers(self.admin)
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["total_items"], 1)
        self.assertEqual(body["results"][0]["email"], "pro@example.com")

        paged = self.client.get("/api/users/", {"page": 2, "limit": 2}, headers=auth_headers(self.admin))
        body = paged.json()
        self.assertEqual(
            (body["page"], body["page_size"], body["total_items"], body["total_pages"], body["items_on_page"]),
            (2, 2, 3, 2, 1),
        )

    def test_search_by_name_or_email(self) -> None:
        resp = self.client.get("/api/users/", {"search": "paula"}, headers=auth_headers(self.admin))
        self.assertEqual([u["email"] for u in resp.json()["results"]], ["pro@example.com"])

    def test_invalid_pagination_is_rejected(self) -> None:
        resp = self.client.get("/api/users/", {"page_size": 500}, headers=auth_headers(self.admin))
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["details"][0]["path"], "page_size")

    def test_user_reads_own_profile_only(self) -> None:
        own = self.client.get(f"/api/users/{self.client_user.id}/", headers=auth_headers(self.client_user))
        other = self.client.get(f"/api/users/{self.professional.id}/", headers=auth_headers(self.client_user))
        by_admin = self.client.get(f"/api/users/{self.professional.id}/", headers=auth_headers(self.admin))

        self.assertEqual(own.status_code, 200)
        self.assertEqual(other.status_code, 403)
        self.assertEqual(by_admin.status_code, 200)

    def test_malformed_id_is_not_found(self) -> None:
        resp = self.client.get("/api/users/nao-e-uuid/", headers=auth_headers(self.admin))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Usuário não encontrado")

    def test_update_own_profile(self) -> None:
        resp = self.client.patch(
            f"/api/users/{self.client_user.id}/",
            {"name": "Carla Souza", "phone": "(21) 99876-5432"},
            content_type=JSON,
            headers=auth_headers(self.client_user),
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Carla Souza")
        self.assertEqual(resp.json()["phone"], "21998765432")

    def test_only_admin_toggles_active_flag(self) -> None:
        url = f"/api/users/{self.client_user.id}/"
        denied = self.client.patch(
            url, {"is_active": False}, content_type=JSON, headers=auth_headers(self.client_user)
        )
        self.assertEqual(denied.status_code, 403)

        allowed = self.client.patch(url, {"is_active": False}, content_type=JSON, headers=auth_headers(self.admin))
        self.assertEqual(allowed.status_code, 200)
        self.assertFalse(User.objects.get(id=self.client_user.id).is_active)

    def test_admin_cannot_deactivate_self(self) -> None:
        resp = self.client.patch(
            f"/api/users/{self.admin.id}/", {"is_active": False}, content_type=JSON, headers=auth_headers(self.admin)
        )
        self.assertEqual(resp.status_code, 400)

    def test_delete_user(self) -> None:
        forbidden = self.client.delete(f"/api/users/{self.professional.id}/", headers=auth_headers(self.client_user))
        self.assertEqual(forbidden.status_code, 403)

        resp = self.client.delete(f"/api/users/{self.professional.id}/", headers=auth_headers(self.admin))
        self.assertEqual(resp.status_code, 204)
        self.assertFalse(User.objects.filter(id=self.professional.id).exists())

        again = self.client.delete(f"/api/users/{self.professional.id}/", headers=auth_headers(self.admin))
        self.assertEqual(again.status_code, 404)


@override_settings(BCRYPT_ROUNDS=4)
class AdminStatsTests(TestCase):
    def test_stats_aggregate_platform_counts(self) -> None:
        admin = make_user("admin@example.com", user_type="ADMIN")
        client = make_user("cliente@example.com")
        professional = make_user("pro@example.com", user_type="PROFESSIONAL")
        make_organization(professional)
        done = make_appointment(client, professional, status=Appointment.Status.COMPLETED)
        make_appointment(client, professional)
        make_review(done, rating=4)

        resp = self.client.get("/api/admin/stats/", headers=auth_headers(admin))

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["users_by_type"], {"CLIENT": 1, "PROFESSIONAL": 1, "ADMIN": 1})
        self.assertEqual(body["total_users"], 3)
        self.assertEqual(body["total_organizations"], 1)
        self.assertEqual(body["appointments_by_status"]["COMPLETED"], 1)
        self.assertEqual(body["appointments_by_status"]["PENDING"], 1)
        self.assertEqual(body["total_reviews"], 1)
        self.assertEqual(body["average_rating"], 4.0)

    def test_stats_are_admin_only(self) -> None:
        client = make_user("cliente@example.com")
        self.assertEqual(self.client.get("/api/admin/stats/", headers=auth_headers(client)).status_code, 403)
        self.assertEqual(self.client.get("/api/admin/stats/").status_code, 401)


@override_settings(BCRYPT_ROUNDS=4)
class SeedAdminCommandTests(TestCase):
    def test_creates_admin(self) -> None:
        out = StringIO()
        call_command("seed_admin", email="Root@Quezi.com", password="Admin1234", stdout=out)

        user = User.objects.get(email="root@quezi.com")
        self.assertEqual(user.user_type, "ADMIN")
        self.assertTrue(user.is_email_verified)
        self.assertTrue(HashService.verify("Admin1234", user.password_hash))
        self.assertIn("criado", out.getvalue())

    def test_promotes_existing_user(self) -> None:
        existing = make_user("root@quezi.com")
        call_command("seed_admin", email="root@quezi.com", password="Admin1234", stdout=StringIO())

        existing.refresh_from_db()
        self.assertEqual(existing.user_type, "ADMIN")
        self.assertEqual(User.objects.count(), 1)

    def test_weak_password_is_rejected(self) -> None:
        with self.assertRaises(CommandError):
            call_command("seed_admin", email="root@quezi.com", password="fraca", stdout=StringIO())
        self.assertFalse(User.objects.exists())
