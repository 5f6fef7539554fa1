from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase, APIClient
from rest_framework.authtoken.models import Token

from profiles.models import Profile

User = get_user_model()

class ProfilePatchTests(APITestCase):
    def setUp(self):
        self.user_a = User.objects.create_user(
            username="owner", email="owner@mail.de", password="Pass123!"
        )
        self.user_b = User.objects.create_user(
            username="other", email="other@mail.de", password="Pass123!"
        )
        self.profile_a = Profile.objects.create(user=self.user_a, type="executor")
        self.profile_b = Profile.objects.create(user=self.user_b, type="client")

        self.client_owner = APIClient()
        self.client_owner.credentials(HTTP_AUTHORIZATION="Token " + Token.objects.create(user=self.user_a).key)

        self.client_anon = APIClient()

        self.url_owner = reverse("profile", kwargs={"pk": self.user_a.id})
        self.url_other = reverse("profile", kwargs={"pk": self.user_b.id})

    def test_owner_can_patch_profile(self):
        payload = {
            "first_name": "Max",
            "last_name": "Mustermann",
            "location": "Osh",
            "tel": "987654321",
            "description": "Updated description",
            "specialization": "Data pipelines",
            "email": "new_email@mail.de",
        }
        resp = self.client_owner.patch(self.url_owner, payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["first_name"], "Max")
        self.assertEqual(resp.data["specialization"], "Data pipelines")
        self.assertEqual(resp.data["email"], "new_email@mail.de")

        self.user_a.refresh_from_db()
        self.profile_a.refresh_from_db()
        self.assertEqual(self.user_a.last_name, "Mustermann")
        self.assertEqual(self.profile_a.location, "Osh")

    def test_statistics_and_type_cannot_be_patched(self):
        payload = {"type": "client", "completed_orders": 99, "is_verified": True}
        resp = self.client_owner.patch(self.url_owner, payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.profile_a.refresh_from_db()
        self.assertEqual(self.profile_a.type, "executor")
        self.assertEqual(self.profile_a.completed_orders, 0)
        self.assertFalse(self.profile_a.is_verified)

    def test_forbidden_when_patching_foreign_profile(self):
        resp = self.client_owner.patch(self.url_other, {"location": "Naryn"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_unauthenticated_gets_401(self):
        resp = self.client_anon.patch(self.url_owner, {"location": "Talas"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_null_values_are_coalesced_to_empty_strings_in_response(self):
        payload = {
            "first_name": None,
            "last_name": None,
            "location": None,
            "tel": None,
            "description": None,
        }
        resp = self.client_owner.patch(self.url_owner, payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        for f in ["first_name", "last_name", "location", "tel", "description"]:
            self.assertEqual(resp.data.get(f), "")

    def test_invalid_email_returns_400(self):
        resp = self.client_owner.patch(self.url_owner, {"email": "not-an-email"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", str(resp.data))


class ProfilePatchLazyCreateTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="owner2", email="o2@mail.de", password="Pass123!")
        self.client_auth = APIClient()
        self.client_auth.credentials(HTTP_AUTHORIZATION="Token " + Token.objects.create(user=self.user).key)
        self.url = reverse("profile", kwargs={"pk": self.user.id})

    def test_owner_patch_creates_profile_if_missing(self):
        self.assertFalse(Profile.objects.filter(user=self.user).exists())
        resp = self.client_auth.patch(self.url, {"location": "Karakol", "first_name": "Max"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        prof = Profile.objects.get(user=self.user)
        self.assertEqual(prof.location, "Karakol")
        self.user.refresh_from_db()
        self.assertEqual(self.user.first_name, "Max")

    def test_staff_cannot_patch_foreign_profile(self):
        staff = User.objects.create_user(username="staff", password="Pass123!", is_staff=True)
        staff_client = APIClient()
        staff_client.credentials(HTTP_AUTHORIZATION="Token " + Token.objects.create(user=staff).key)
        resp = staff_client.patch(self.url, {"location": "Batken"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_foreign_patch_creates_no_profile(self):
        stranger = User.objects.create_user(username="stranger", password="Pass123!")
        url = reverse("profile", kwargs={"pk": stranger.id})
        resp = self.client_auth.patch(url, {"location": "Batken"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(str(resp.data["detail"]), "You are only allowed to update your own profile.")
        self.assertFalse(Profile.objects.filter(user__in=[stranger, self.user]).exists())
