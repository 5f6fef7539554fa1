from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from disputes.models import Dispute
from orders.models import Order, OrderResponse
from profiles.models import Profile

User = get_user_model()

REASON = "work quality is unacceptable"


def create_user_with_type(username, target: str, **extra):
    user = User.objects.create_user(username, f"{username}@example.com", "pass1234", **extra)
    if target:
        Profile.objects.create(user=user, type=target, is_verified=True)
    return user, Token.objects.create(user=user)


class DisputeApiTests(APITestCase):
    def setUp(self):
        self.cust, self.cust_token = create_user_with_type("cust", "client")
        self.exe, self.exe_token = create_user_with_type("exe", "executor")
        self.admin, self.admin_token = create_user_with_type("admin", "", is_staff=True)
        self.order = Order.objects.create(
            client=self.cust,
            executor=self.exe,
            title="Shop",
            description="Online shop",
            status=Order.Status.IN_PROGRESS,
        )
        OrderResponse.objects.create(order=self.order, executor=self.exe, cover_letter="hi", is_selected=True)

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def open_dispute(self):
        self.auth(self.exe_token)
        res = self.client.post(reverse("order-dispute-open", kwargs={"pk": self.order.id}), {"reason": REASON}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        return res.data["id"]

    def test_full_arbitration_round_trip(self):
        dispute_id = self.open_dispute()

        self.auth(self.cust_token)
        res = self.client.get(reverse("order-dispute", kwargs={"order_id": self.order.id}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "open")
        self.assertEqual(res.data["order_status"], "disputed")
        self.assertNotIn("admin_notes", res.data)

        res = self.client.post(
            reverse("dispute-evidence", kwargs={"pk": dispute_id}),
            {"file_url": "https://files/shot.png", "file_name": "shot.png", "file_size": 2048},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

        self.auth(self.admin_token)
        res = self.client.put(reverse("admin-dispute-take", kwargs={"pk": dispute_id}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "under_review")

        res = self.client.put(reverse("admin-dispute-notes", kwargs={"pk": dispute_id}), {"notes": "checking"}, format="json")
        self.assertEqual(res.data["admin_notes"], "checking")

        res = self.client.put(
            reverse("admin-dispute-resolve", kwargs={"pk": dispute_id}),
            {"favor_client": True, "resolution_notes": "refund"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "resolved")
        self.assertEqual(res.data["resolution"], "favor_client")
        self.assertEqual(res.data["order_status"], "cancelled")

        self.auth(self.exe_token)
        res = self.client.post(
            reverse("dispute-evidence", kwargs={"pk": dispute_id}),
            {"file_url": "https://files/late.png", "file_name": "late.png"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

        res = self.client.get(reverse("dispute-evidence", kwargs={"pk": dispute_id}))
        self.assertEqual([e["file_name"] for e in res.data], ["shot.png"])

    def test_short_reason_400(self):
        self.auth(self.exe_token)
        res = self.client.post(reverse("order-dispute-open", kwargs={"pk": self.order.id}), {"reason": "bad"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("reason", res.data)

    def test_duplicate_dispute_409(self):
        self.open_dispute()
        self.auth(self.cust_token)
        res = self.client.post(reverse("order-dispute-open", kwargs={"pk": self.order.id}), {"reason": REASON}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_admin_endpoints_reject_non_staff_403(self):
        dispute_id = self.open_dispute()
        self.auth(self.cust_token)
        checks = [
            ("get", reverse("admin-dispute-list")),
            ("get", reverse("admin-dispute-active")),
            ("get", reverse("admin-dispute-detail", kwargs={"pk": dispute_id})),
            ("put", reverse("admin-dispute-take", kwargs={"pk": dispute_id})),
            ("put", reverse("admin-dispute-notes", kwargs={"pk": dispute_id})),
            ("put", reverse("admin-dispute-resolve", kwargs={"pk": dispute_id})),
            ("get", reverse("admin-dispute-messages", kwargs={"pk": dispute_id})),
        ]
        for method, url in checks:
            res = getattr(self.client, method)(url, {}, format="json")
            self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN, url)
        self.assertEqual(Dispute.objects.get(pk=dispute_id).status, Dispute.Status.OPEN)

    def test_admin_list_filters_by_status(self):
        self.open_dispute()
        self.auth(self.admin_token)
        res = self.client.get(reverse("admin-dispute-list"), {"status": "open"})
        self.assertEqual(res.data["count"], 1)
        res = self.client.get(reverse("admin-dispute-list"), {"status": "resolved"})
        self.assertEqual(res.data["count"], 0)
        res = self.client.get(reverse("admin-dispute-active"))
        self.assertEqual(res.data["count"], 1)

    def test_resolve_requires_favor_flag_400(self):
        dispute_id = self.open_dispute()
        self.auth(self.admin_token)
        res = self.client.put(reverse("admin-dispute-resolve", kwargs={"pk": dispute_id}), {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
