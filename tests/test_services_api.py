"""Tests for the services catalog and its categories."""

from decimal import Decimal

from django.test import TestCase, override_settings

from plugins.django_interface.models import Appointment, Service, ServiceCategory
from tests.helpers.factories import (
    auth_headers,
    make_appointment,
    make_category,
    make_service,
    make_user,
)

JSON = "application/json"


@override_settings(BCRYPT_ROUNDS=4)
class ServiceCrudTests(TestCase):
    def setUp(self) -> None:
        self.pro = make_user("pro@example.com", user_type="PROFESSIONAL")
        self.other = make_user("outra@example.com", user_type="PROFESSIONAL")
        self.category = make_category(name="Unhas", slug="unhas")

    def _payload(self, **overrides):
        data = {
            "category_id": str(self.category.id),
            "name": "Manicure",
            "price": "45.9",
            "duration_minutes": 60,
        }
        data.update(overrides)
        return data

    def test_professional_creates_service(self) -> None:
        resp = self.client.post("/api/services/", self._payload(), content_type=JSON, headers=auth_headers(self.pro))

        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["professional_id"], str(self.pro.id))
        self.assertEqual((body["price"], body["price_type"]), ("45.90", "FIXED"))

    def test_client_cannot_create_service(self) -> None:
        client = make_user("cliente@example.com")
        resp = self.client.post("/api/services/", self._payload(), content_type=JSON, headers=auth_headers(client))
        self.assertEqual(resp.status_code, 403)

    def test_unknown_category_is_not_found(self) -> None:
        self.category.delete()
        resp = self.client.post("/api/services/", self._payload(), content_type=JSON, headers=auth_headers(self.pro))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["error"], "NotFound")

    def test_duration_out_of_range(self) -> None:
        resp = self.client.post(
            "/api/services/", self._payload(duration_minutes=500), content_type=JSON, headers=auth_headers(self.pro)
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["details"][0]["path"], "duration_minutes")
        self.assertFalse(Service.objects.exists())

    def test_only_owner_updates_or_deletes(self) -> None:
        service = make_service(self.pro, category=self.category)
        url = f"/api/services/{service.id}/"

        forbidden = self.client.patch(url, {"price": "10"}, content_type=JSON, headers=auth_headers(self.other))
        self.assertEqual(forbidden.status_code, 403)
        self.assertEqual(self.client.delete(url, headers=auth_headers(self.other)).status_code, 403)

        resp = self.client.patch(
            url, {"price": "60", "description": "Com esmaltação"}, content_type=JSON, headers=auth_headers(self.pro)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual((resp.json()["price"], resp.json()["description"]), ("60.00", "Com esmaltação"))

        self.assertEqual(self.client.delete(url, headers=auth_headers(self.pro)).status_code, 204)
        self.assertFalse(Service.objects.filter(id=service.id).exists())

    def test_deleted_service_keeps_appointment_snapshot(self) -> None:
        service = make_service(self.pro, category=self.category)
        appt = make_appointment(make_user(), self.pro, service=service)

        self.client.delete(f"/api/services/{service.id}/", headers=auth_headers(self.pro))

        appt.refresh_from_db()
        self.assertIsNone(appt.service_id)
        self.assertEqual((appt.service_name, appt.price), ("Manicure", Decimal("45.90")))


@override_settings(BCRYPT_ROUNDS=4)
class ServiceBrowsingTests(TestCase):
    def setUp(self) -> None:
        self.pro = make_user("pro@example.com", user_type="PROFESSIONAL")
        self.other = make_user("outra@example.com", user_type="PROFESSIONAL")
        self.hair = make_category(name="Cabelo", slug="cabelo")
        self.nails = make_category(name="Unhas", slug="unhas")
        self.cut = make_service(self.pro, category=self.hair, name="Corte", price=Decimal("80"))
        self.color = make_service(self.pro, category=self.hair, name="Coloração", price=Decimal("150"))
        self.gel = make_service(self.other, category=self.nails, name="Unha em gel", price=Decimal("60"))

    def _names(self, resp) -> list[str]:
        return [s["name"] for s in resp.json()["results"]]

    def test_public_list_filters(self) -> None:
        by_category = self.client.get("/api/services/", {"category_id": str(self.hair.id), "sort_by": "name", "sort_order": "asc"})
        self.assertEqual(by_category.status_code, 200)
        self.assertEqual(self._names(by_category), ["Coloração", "Corte"])

        by_professional = self.client.get("/api/services/", {"professional_id": str(self.other.id)})
        self.assertEqual(self._names(by_professional), ["Unha em gel"])

        by_price = self.client.get("/api/services/", {"min_price": "50", "max_price": "100", "sort_by": "price", "sort_order": "asc"})
        self.assertEqual(self._names(by_price), ["Unha em gel", "Corte"])

        by_search = self.client.get("/api/services/", {"search": "gel"})
        self.assertEqual(self._names(by_search), ["Unha em gel"])

    def test_inverted_price_range_is_rejected(self) -> None:
        resp = self.client.get("/api/services/", {"min_price": "100", "max_price": "50"})
        self.assertEqual(resp.status_code, 400)

    def test_retrieve(self) -> None:
        resp = self.client.get(f"/api/services/{self.cut.id}/")
        self.assertEqual(resp.json()["category_id"], str(self.hair.id))
        self.assertEqual(self.client.get("/api/services/nao-e-uuid/").status_code, 404)

    def test_popular_counts_appointments(self) -> None:
        client = make_user("cliente@example.com")
        for _ in range(3):
            make_appointment(client, self.other, service=self.gel)
        make_appointment(client, self.pro, service=self.color, status=Appointment.Status.COMPLETED)

        resp = self.client.get("/api/services/popular/", {"limit": "2"})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            [(s["name"], s["appointments_count"]) for s in resp.json()],
            [("Unha em gel", 3), ("Coloração", 1)],
        )
        self.assertEqual(self.client.get("/api/services/popular/", {"limit": "51"}).status_code, 400)


@override_settings(BCRYPT_ROUNDS=4)
class CategoryTests(TestCase):
    def setUp(self) -> None:
        self.admin = make_user("admin@example.com", user_type="ADMIN")
        self.pro = make_user("pro@example.com", user_type="PROFESSIONAL")

    def test_admin_creates_category_with_derived_slug(self) -> None:
        resp = self.client.post(
            "/api/categories/", {"name": "Maquiagem Artística"}, content_type=JSON, headers=auth_headers(self.admin)
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["slug"], "maquiagem-artistica")

    def test_only_admin_manages_categories(self) -> None:
        category = make_category(slug="cabelo")
        headers = auth_headers(self.pro)

        attempts = [
            self.client.post("/api/categories/", {"name": "Barba"}, content_type=JSON, headers=headers),
            self.client.patch(f"/api/categories/{category.id}/", {"name": "Cabelos"}, content_type=JSON, headers=headers),
            self.client.delete(f"/api/categories/{category.id}/", headers=headers),
        ]
        for resp in attempts:
            with self.subTest(method=resp.request["REQUEST_METHOD"]):
                self.assertEqual(resp.status_code, 403)
                self.assertEqual(resp.json()["message"], "Apenas administradores podem gerenciar categorias")

    def test_slug_conflicts(self) -> None:
        make_category(name="Cabelo", slug="cabelo")
        other = make_category(name="Barba", slug="barba")

        created = self.client.post(
            "/api/categories/", {"name": "Cabelo"}, content_type=JSON, headers=auth_headers(self.admin)
        )
        self.assertEqual(created.status_code, 409)
        self.assertEqual(created.json()["message"], "Já existe uma categoria com este slug")

        renamed = self.client.patch(
            f"/api/categories/{other.id}/", {"slug": "cabelo"}, content_type=JSON, headers=auth_headers(self.admin)
        )
        self.assertEqual(renamed.status_code, 409)

    def test_public_list_by_slug_and_detail(self) -> None:
        hair = make_category(name="Cabelo", slug="cabelo")
        make_category(name="Unhas", slug="unhas")
        make_service(self.pro, category=hair)
        make_service(self.pro, category=hair, name="Escova")

        listed = self.client.get("/api/categories/")
        self.assertEqual(listed.status_code, 200)
        self.assertEqual(
            [(c["slug"], c["services_count"]) for c in listed.json()["results"]],
            [("cabelo", 2), ("unhas", 0)],
        )

        searched = self.client.get("/api/categories/", {"search": "unh"})
        self.assertEqual([c["slug"] for c in searched.json()["results"]], ["unhas"])

        by_slug = self.client.get("/api/categories/slug/cabelo/")
        self.assertEqual(by_slug.json()["id"], str(hair.id))
        self.assertEqual(self.client.get("/api/categories/slug/nao-existe/").status_code, 404)

        detail = self.client.get(f"/api/categories/{hair.id}/")
        self.assertEqual(detail.json()["name"], "Cabelo")

    def test_category_in_use_cannot_be_deleted(self) -> None:
        used = make_category(slug="cabelo")
        make_service(self.pro, category=used)
        empty = make_category(slug="vazia")

        blocked = self.client.delete(f"/api/categories/{used.id}/", headers=auth_headers(self.admin))
        self.assertEqual(blocked.status_code, 409)

        resp = self.client.delete(f"/api/categories/{empty.id}/", headers=auth_headers(self.admin))
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(list(ServiceCategory.objects.values_list("slug", flat=True)), ["cabelo"])
