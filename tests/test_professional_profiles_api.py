"""Tests for professional profiles: creation, public browsing and owner edits."""

from django.test import TestCase, override_settings

from plugins.django_interface.models import Appointment, ProfessionalProfile
from tests.helpers.factories import (
    auth_headers,
    make_appointment,
    make_profile,
    make_review,
    make_service,
    make_user,
)

JSON = "application/json"


def _rate(professional, ratings: list[int]) -> None:
    for rating in ratings:
        client = make_user()
        appt = make_appointment(client, professional, status=Appointment.Status.COMPLETED)
        make_review(appt, rating=rating)


@override_settings(BCRYPT_ROUNDS=4)
class ProfileCreationTests(TestCase):
    def setUp(self) -> None:
        self.pro = make_user("pro@example.com", name="Ana Cabeleireira", user_type="PROFESSIONAL")

    def test_professional_creates_own_profile(self) -> None:
        resp = self.client.post(
            "/api/professionals/",
            {"city": "Recife", "service_mode": "BOTH", "specialties": ["Corte", "Escova"], "bio": "Dez anos de salão"},
            content_type=JSON,
            headers=auth_headers(self.pro),
        )

        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["user_id"], str(self.pro.id))
        self.assertEqual(body["specialties"], ["Corte", "Escova"])
        self.assertTrue(body["is_active"])
        self.assertFalse(body["is_verified"])
        self.assertEqual(body["portfolio_images"], [])

    def test_client_cannot_have_profile(self) -> None:
        client = make_user("cliente@example.com")
        resp = self.client.post(
            "/api/professionals/",
            {"city": "Recife", "service_mode": "BOTH"},
            content_type=JSON,
            headers=auth_headers(client),
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Apenas usuários profissionais podem ter perfil")

    def test_second_profile_conflicts(self) -> None:
        make_profile(self.pro)
        resp = self.client.post(
            "/api/professionals/",
            {"city": "Recife", "service_mode": "BOTH"},
            content_type=JSON,
            headers=auth_headers(self.pro),
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(ProfessionalProfile.objects.count(), 1)

    def test_invalid_mode_is_rejected(self) -> None:
        resp = self.client.post(
            "/api/professionals/",
            {"city": "Recife", "service_mode": "ONLINE"},
            content_type=JSON,
            headers=auth_headers(self.pro),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["details"][0]["path"], "service_mode")

    def test_create_requires_authentication(self) -> None:
        resp = self.client.post("/api/professionals/", {"city": "Recife"}, content_type=JSON)
        self.assertEqual(resp.status_code, 401)


@override_settings(BCRYPT_ROUNDS=4)
class ProfileBrowsingTests(TestCase):
    def setUp(self) -> None:
        self.ana = make_user("ana@example.com", name="Ana Tranças", user_type="PROFESSIONAL")
        self.bia = make_user("bia@example.com", name="Bia Unhas", user_type="PROFESSIONAL")
        self.carla = make_user("carla@example.com", name="Carla Oculta", user_type="PROFESSIONAL")
        make_profile(self.ana, city="São Paulo", specialties=["Tranças", "Coloração"], years_of_experience=8)
        make_profile(self.bia, city="Recife", service_mode="AT_DOMICILE", specialties=["Unhas em gel"])
        make_profile(self.carla, city="São Paulo", is_active=False)

    def _ids(self, resp) -> set[str]:
        return {p["user_id"] for p in resp.json()["results"]}

    def test_public_list_hides_inactive_profiles(self) -> None:
        resp = self.client.get("/api/professionals/")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["total_items"], 2)
        self.assertEqual(self._ids(resp), {str(self.ana.id), str(self.bia.id)})

    def test_filters_city_mode_and_specialty(self) -> None:
        by_city = self.client.get("/api/professionals/", {"city": "paulo"})
        self.assertEqual(self._ids(by_city), {str(self.ana.id)})

        by_mode = self.client.get("/api/professionals/", {"service_mode": "AT_DOMICILE"})
        self.assertEqual(self._ids(by_mode), {str(self.bia.id)})

        by_specialty = self.client.get("/api/professionals/", {"specialty": "tranças"})
        self.assertEqual(self._ids(by_specialty), {str(self.ana.id)})

        partial = self.client.get("/api/professionals/", {"specialty": "Unhas"})
        self.assertEqual(self._ids(partial), set())

    def test_min_rating_uses_received_reviews(self) -> None:
        _rate(self.ana, [5, 4])
        _rate(self.bia, [2])

        resp = self.client.get("/api/professionals/", {"min_rating": "4"})

        self.assertEqual(self._ids(resp), {str(self.ana.id)})
        result = resp.json()["results"][0]
        self.assertEqual((result["average_rating"], result["total_reviews"]), (4.5, 2))

    def test_list_sorted_by_experience(self) -> None:
        resp = self.client.get("/api/professionals/", {"sort_by": "experience", "sort_order": "desc"})
        self.assertEqual(
            [p["user_id"] for p in resp.json()["results"]], [str(self.ana.id), str(self.bia.id)]
        )

    def test_search_matches_name_and_specialty(self) -> None:
        by_name = self.client.get("/api/professionals/search/", {"query": "bia"})
        self.assertEqual(self._ids(by_name), {str(self.bia.id)})

        by_specialty = self.client.get("/api/professionals/search/", {"query": "gel"})
        self.assertEqual(self._ids(by_specialty), {str(self.bia.id)})

        short = self.client.get("/api/professionals/search/", {"query": "a"})
        self.assertEqual(short.status_code, 400)

    def test_top_rated_needs_minimum_reviews(self) -> None:
        _rate(self.ana, [5, 5, 5, 4, 4])
        _rate(self.bia, [5, 5, 5, 5, 5])
        _rate(self.carla, [5, 5, 5, 5, 5])

        resp = self.client.get("/api/professionals/top-rated/", {"limit": "5"})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual([p["user_id"] for p in resp.json()], [str(self.bia.id), str(self.ana.id)])
        self.assertEqual(resp.json()[1]["average_rating"], 4.6)

        few = make_user(user_type="PROFESSIONAL")
        make_profile(few)
        _rate(few, [5, 5])
        again = self.client.get("/api/professionals/top-rated/")
        self.assertNotIn(str(few.id), [p["user_id"] for p in again.json()])

    def test_detail_includes_services(self) -> None:
        make_service(self.ana, name="Tranças nagô")
        make_service(self.ana, name="Coloração")

        resp = self.client.get(f"/api/professionals/{self.ana.id}/")

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["name"], "Ana Tranças")
        self.assertEqual([s["name"] for s in body["services"]], ["Coloração", "Tranças nagô"])
        self.assertIsNone(body["average_rating"])
        self.assertEqual(body["total_reviews"], 0)

    def test_list_previews_at_most_five_services(self) -> None:
        for i in range(7):
            make_service(self.ana, name=f"Serviço {i}")

        resp = self.client.get("/api/professionals/", {"city": "São Paulo"})
        self.assertEqual(len(resp.json()["results"][0]["services"]), 5)

    def test_inactive_profile_only_visible_to_owner(self) -> None:
        url = f"/api/professionals/{self.carla.id}/"

        self.assertEqual(self.client.get(url).status_code, 404)
        self.assertEqual(self.client.get(url, headers=auth_headers(self.ana)).status_code, 404)
        self.assertEqual(self.client.get(url, headers=auth_headers(self.carla)).status_code, 200)
        admin = make_user("admin@example.com", user_type="ADMIN")
        self.assertEqual(self.client.get(url, headers=auth_headers(admin)).status_code, 200)

    def test_unknown_and_malformed_ids(self) -> None:
        client = make_user("cliente@example.com")
        self.assertEqual(self.client.get(f"/api/professionals/{client.id}/").status_code, 404)
        self.assertEqual(self.client.get("/api/professionals/nao-e-uuid/").status_code, 404)


@override_settings(BCRYPT_ROUNDS=4)
class ProfileOwnerTests(TestCase):
    def setUp(self) -> None:
        self.pro = make_user("pro@example.com", user_type="PROFESSIONAL")
        self.other = make_user("outra@example.com", user_type="PROFESSIONAL")
        make_profile(self.pro)
        self.url = f"/api/professionals/{self.pro.id}/"

    def test_me_returns_own_profile(self) -> None:
        resp = self.client.get("/api/professionals/me/", headers=auth_headers(self.pro))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user_id"], str(self.pro.id))

        missing = self.client.get("/api/professionals/me/", headers=auth_headers(self.other))
        self.assertEqual(missing.status_code, 404)

        self.assertEqual(self.client.get("/api/professionals/me/").status_code, 401)

    def test_owner_updates_profile(self) -> None:
        resp = self.client.patch(
            self.url,
            {"bio": "Especialista em cachos", "years_of_experience": 12, "city": None},
            content_type=JSON,
            headers=auth_headers(self.pro),
        )

        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual((body["bio"], body["years_of_experience"]), ("Especialista em cachos", 12))
        self.assertEqual(body["city"], "São Paulo")

    def test_others_cannot_edit(self) -> None:
        headers = auth_headers(self.other)
        attempts = [
            self.client.patch(self.url, {"bio": "invasão"}, content_type=JSON, headers=headers),
            self.client.put(
                f"{self.url}portfolio/",
                {"portfolio_images": ["https://img.example.com/1.jpg"]},
                content_type=JSON,
                headers=headers,
            ),
            self.client.patch(f"{self.url}active/", {"is_active": False}, content_type=JSON, headers=headers),
            self.client.delete(self.url, headers=headers),
        ]
        for resp in attempts:
            with self.subTest(path=resp.request["PATH_INFO"]):
                self.assertEqual(resp.status_code, 403)
        self.assertTrue(ProfessionalProfile.objects.get(user=self.pro).is_active)

    def test_portfolio_replaces_images(self) -> None:
        images = ["https://img.example.com/1.jpg", "https://img.example.com/2.jpg"]
        resp = self.client.put(
            f"{self.url}portfolio/", {"portfolio_images": images}, content_type=JSON, headers=auth_headers(self.pro)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["portfolio_images"], images)

        empty = self.client.put(
            f"{self.url}portfolio/", {"portfolio_images": []}, content_type=JSON, headers=auth_headers(self.pro)
        )
        self.assertEqual(empty.status_code, 400)

    def test_working_hours(self) -> None:
        hours = {
            "MONDAY": {"is_open": True, "slots": [{"start": "09:00", "end": "12:00"}, {"start": "13:00", "end": "18:00"}]},
            "SUNDAY": {"is_open": False, "slots": []},
        }
        resp = self.client.put(
            f"{self.url}working-hours/", {"working_hours": hours}, content_type=JSON, headers=auth_headers(self.pro)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["working_hours"], hours)

        inverted = self.client.put(
            f"{self.url}working-hours/",
            {"working_hours": {"MONDAY": {"is_open": True, "slots": [{"start": "18:00", "end": "09:00"}]}}},
            content_type=JSON,
            headers=auth_headers(self.pro),
        )
        self.assertEqual(inverted.status_code, 400)

    def test_deactivate_hides_from_public_list(self) -> None:
        resp = self.client.patch(
            f"{self.url}active/", {"is_active": False}, content_type=JSON, headers=auth_headers(self.pro)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["is_active"])
        self.assertEqual(self.client.get("/api/professionals/").json()["total_items"], 0)

    def test_owner_deletes_profile(self) -> None:
        resp = self.client.delete(self.url, headers=auth_headers(self.pro))
        self.assertEqual(resp.status_code, 204)
        self.assertFalse(ProfessionalProfile.objects.filter(user=self.pro).exists())
