from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from disputes.models import Dispute
from disputes.services import open_dispute, resolve_dispute
from orders import lifecycle, registry
from orders.admin import OrderAdmin
from orders.models import Order, OrderResponse
from profiles.models import Profile

User = get_user_model()

LONG_DESCRIPTION = "x" * 250


def create_user_with_type(username, target: str, **profile):
    user = User.objects.create_user(username, f"{username}@example.com", "pass1234")
    Profile.objects.create(user=user, type=target, **profile)
    return user, Token.objects.create(user=user)


class OrderApiTestBase(APITestCase):
    def setUp(self):
        self.cust, self.cust_token = create_user_with_type("cust", "client")
        self.exe, self.exe_token = create_user_with_type("exe", "executor", is_verified=True)
        self.rookie, self.rookie_token = create_user_with_type("rookie", "executor")
        self.admin = User.objects.create_user("admin", "admin@example.com", "pass1234", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def make_order(self, **kwargs):
        kwargs.setdefault("title", "Mobile app")
        kwargs.setdefault("description", LONG_DESCRIPTION)
        return Order.objects.create(client=self.cust, **kwargs)


class OrderCreateTests(OrderApiTestBase):
    def setUp(self):
        super().setUp()
        self.url = reverse("order-list")

    def test_client_creates_order_201(self):
        self.auth(self.cust_token)
        payload = {
            "title": "Mobile app",
            "description": "iOS and Android",
            "budget_min": "100.00",
            "budget_max": "500.00",
            "location": "Bishkek",
        }
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], "new")
        self.assertEqual(res.data["client"], self.cust.id)
        self.assertIsNone(res.data["executor"])
        self.assertEqual(res.data["description"], "iOS and Android")

    def test_unauthenticated_401(self):
        res = self.client.post(self.url, {"title": "x", "description": "y"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_executor_cannot_create_403(self):
        self.auth(self.exe_token)
        res = self.client.post(self.url, {"title": "x", "description": "y"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_inverted_budget_400(self):
        self.auth(self.cust_token)
        payload = {"title": "x", "description": "y", "budget_min": "500", "budget_max": "100"}
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("budget_max", res.data)

    def test_missing_title_400(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"description": "y"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("title", res.data)


class OrderFeedTests(OrderApiTestBase):
    def setUp(self):
        super().setUp()
        self.url = reverse("order-list")
        self.cheap = self.make_order(title="Cheap logo", budget_min=10, budget_max=50, location="Osh")
        self.pricey = self.make_order(title="Big portal", budget_min=1000, budget_max=5000, location="Bishkek")
        self.make_order(title="Hidden", is_public=False)
        self.make_order(title="Removed", is_deleted=True)
        self.make_order(title="Taken", status=Order.Status.IN_PROGRESS, executor=self.exe)

    def titles(self, res):
        return {row["title"] for row in res.data["results"]}

    def test_feed_lists_public_new_orders(self):
        self.auth(self.exe_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual(self.titles(res), {"Cheap logo", "Big portal"})
        self.assertNotIn("description", res.data["results"][0])

    def test_budget_filters(self):
        self.auth(self.exe_token)
        self.assertEqual(self.titles(self.client.get(self.url, {"budget_min": 500})), {"Big portal"})
        self.assertEqual(self.titles(self.client.get(self.url, {"budget_max": 100})), {"Cheap logo"})

    def test_search_and_location(self):
        self.auth(self.exe_token)
        self.assertEqual(self.titles(self.client.get(self.url, {"search": "portal"})), {"Big portal"})
        self.assertEqual(self.titles(self.client.get(self.url, {"location": "osh"})), {"Cheap logo"})

    def test_bad_budget_filter_400(self):
        self.auth(self.exe_token)
        res = self.client.get(self.url, {"budget_min": "abc"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)


class OrderDetailTests(OrderApiTestBase):
    def setUp(self):
        super().setUp()
        self.order = self.make_order()
        self.url = reverse("order-detail", kwargs={"pk": self.order.id})

    def test_owner_sees_full_description_without_view_count(self):
        self.auth(self.cust_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["description"], LONG_DESCRIPTION)
        self.assertFalse(res.data["description_truncated"])
        self.assertEqual(res.data["view_count"], 0)

    def test_unverified_visitor_gets_preview(self):
        self.auth(self.rookie_token)
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["description_truncated"])
        self.assertTrue(res.data["requires_verification"])
        self.assertFalse(res.data["requires_subscription"])
        self.assertEqual(res.data["description"], "x" * 200 + "...")
        self.assertEqual(res.data["view_count"], 1)

    def test_verified_executor_sees_full_description(self):
        self.auth(self.exe_token)
        res = self.client.get(self.url)
        self.assertEqual(res.data["description"], LONG_DESCRIPTION)
        self.assertFalse(res.data["description_truncated"])

    def test_patch_new_order(self):
        self.auth(self.cust_token)
        res = self.client.patch(self.url, {"title": "Mobile app v2"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["title"], "Mobile app v2")

    def test_patch_by_other_user_403(self):
        self.auth(self.exe_token)
        res = self.client.patch(self.url, {"title": "Mine"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_patch_started_order_409(self):
        Order.objects.filter(pk=self.order.pk).update(status=Order.Status.IN_PROGRESS, executor=self.exe)
        self.auth(self.cust_token)
        res = self.client.patch(self.url, {"title": "Too late"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_admin_soft_delete_then_404(self):
        self.auth(self.admin_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertTrue(Order.objects.get(pk=self.order.pk).is_deleted)

        self.auth(self.cust_token)
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_404_NOT_FOUND)

    def test_admin_cannot_delete_disputed_order_409(self):
        response = registry.create_response(self.exe, self.order.id, "I can build this", proposed_price=100)
        lifecycle.select_executor(self.cust, self.order.id, response.id)
        dispute = open_dispute(self.exe, self.order.id, "the client keeps changing the scope")

        self.auth(self.admin_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(Order.objects.get(pk=self.order.pk).is_deleted)

        resolved = resolve_dispute(self.admin, dispute.id, True)
        self.assertEqual(resolved.status, Dispute.Status.RESOLVED)
        self.assertEqual(Order.objects.get(pk=self.order.pk).status, Order.Status.CANCELLED)

        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)

    def test_deleted_flag_is_read_only_in_admin(self):
        self.assertIn("is_deleted", OrderAdmin.readonly_fields)

    def test_delete_by_non_staff_403(self):
        self.auth(self.cust_token)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_order_404(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("order-detail", kwargs={"pk": 999999}))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)


class OrderWorkflowApiTests(OrderApiTestBase):
    def setUp(self):
        super().setUp()
        self.order = self.make_order()

    def url(self, name, pk=None):
        return reverse(name, kwargs={"pk": pk or self.order.id})

    def test_respond_select_and_complete(self):
        self.auth(self.exe_token)
        res = self.client.post(
            self.url("order-responses"),
            {"cover_letter": "I can build this", "proposed_price": "100.00", "proposed_days": 7},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        response_id = res.data["id"]

        self.auth(self.cust_token)
        res = self.client.get(self.url("order-responses"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([r["id"] for r in res.data], [response_id])

        res = self.client.post(self.url("order-select-executor"), {"response_id": response_id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "in_progress")
        self.assertEqual(res.data["executor"], self.exe.id)
        self.assertEqual(res.data["agreed_price"], "100.00")

        res = self.client.post(self.url("order-approve"))
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

        self.auth(self.exe_token)
        res = self.client.post(self.url("order-submit-for-review"))
        self.assertEqual(res.data["status"], "on_review")

        self.auth(self.cust_token)
        res = self.client.post(self.url("order-request-revision"), {"reason": "fix typo"}, format="json")
        self.assertEqual(res.data["status"], "revision")

        self.auth(self.exe_token)
        self.client.post(self.url("order-submit-for-review"))

        self.auth(self.cust_token)
        res = self.client.post(self.url("order-approve"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "completed")
        self.assertIsNotNone(res.data["completed_at"])

    def test_client_cannot_respond_403(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url("order-responses"), {"cover_letter": "hi"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_duplicate_response_409(self):
        self.auth(self.exe_token)
        payload = {"cover_letter": "I can build this"}
        self.assertEqual(self.client.post(self.url("order-responses"), payload, format="json").status_code, 201)
        res = self.client.post(self.url("order-responses"), payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_cancel_endpoint(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url("order-cancel"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["status"], "cancelled")

    def test_response_patch_and_delete(self):
        response = OrderResponse.objects.create(order=self.order, executor=self.exe, cover_letter="I can build this")
        self.auth(self.exe_token)
        res = self.client.patch(reverse("response-detail", kwargs={"pk": response.id}), {"proposed_days": 3}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["proposed_days"], 3)

        self.auth(self.rookie_token)
        res = self.client.delete(reverse("response-detail", kwargs={"pk": response.id}))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        self.auth(self.exe_token)
        res = self.client.delete(reverse("response-detail", kwargs={"pk": response.id}))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)


class MyOrdersTests(OrderApiTestBase):
    def test_as_client_and_as_executor(self):
        mine = self.make_order(title="Mine")
        other = self.make_order(title="Other")
        OrderResponse.objects.create(order=mine, executor=self.exe, cover_letter="a", is_selected=True)
        OrderResponse.objects.create(order=other, executor=self.rookie, cover_letter="b")

        self.auth(self.cust_token)
        res = self.client.get(reverse("my-orders-client"))
        self.assertEqual(res.data["count"], 2)

        self.auth(self.exe_token)
        res = self.client.get(reverse("my-orders-executor"))
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["id"], mine.id)
        self.assertTrue(res.data["results"][0]["is_executor_selected"])

        res = self.client.get(reverse("my-responses"))
        self.assertEqual(res.data["count"], 1)
