from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from orders.models import Order
from profiles.models import Profile
from reviews.models import Review

User = get_user_model()


def create_profile_with_type(user, t: str):
    return Profile.objects.create(user=user, type=t)


class ReviewApiTests(APITestCase):
    def setUp(self):
        self.exe = User.objects.create_user("exe", "exe@example.com", "pass1234")
        create_profile_with_type(self.exe, "executor")
        self.exe_token = Token.objects.create(user=self.exe)

        self.cust = User.objects.create_user("cust", "cust@example.com", "pass1234")
        create_profile_with_type(self.cust, "client")
        self.cust_token = Token.objects.create(user=self.cust)

        self.admin = User.objects.create_user("admin", "admin@example.com", "pass1234", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)

        self.order = Order.objects.create(
            client=self.cust, executor=self.exe, title="Logo", description="d", status=Order.Status.COMPLETED
        )
        self.url = reverse("order-review", kwargs={"order_id": self.order.id})

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_create_review_success_201(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"rating": 5, "comment": "Great work!"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["order"], self.order.id)
        self.assertEqual(res.data["client"], self.cust.id)
        self.assertEqual(res.data["executor"], self.exe.id)
        self.assertEqual(res.data["rating"], 5)
        self.assertEqual(Profile.objects.get(user=self.exe).review_count, 1)

        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["comment"], "Great work!")

    def test_unauthenticated_401(self):
        res = self.client.post(self.url, {"rating": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_executor_profile_cannot_review_403(self):
        self.auth(self.exe_token)
        res = self.client.post(self.url, {"rating": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_unfinished_order_409(self):
        Order.objects.filter(pk=self.order.pk).update(status=Order.Status.IN_PROGRESS)
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"rating": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_duplicate_review_409(self):
        self.auth(self.cust_token)
        self.assertEqual(self.client.post(self.url, {"rating": 4}, format="json").status_code, 201)
        res = self.client.post(self.url, {"rating": 5}, format="json")
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_rating_out_of_range_400(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"rating": 7}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_and_delete_by_owner(self):
        review = Review.objects.create(order=self.order, client=self.cust, executor=self.exe, rating=3)
        detail = reverse("review-detail", kwargs={"pk": review.id})

        self.auth(self.exe_token)
        self.assertEqual(self.client.patch(detail, {"rating": 1}, format="json").status_code, 403)

        self.auth(self.cust_token)
        res = self.client.patch(detail, {"rating": 4, "comment": "updated"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["rating"], 4)

        res = self.client.patch(detail, {"executor": self.cust.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

        res = self.client.delete(detail)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Review.objects.filter(pk=review.id).exists())

    def test_moderation_staff_only(self):
        review = Review.objects.create(order=self.order, client=self.cust, executor=self.exe, rating=1)
        url = reverse("admin-review-moderate", kwargs={"pk": review.id})

        self.auth(self.cust_token)
        self.assertEqual(self.client.put(url, {"is_visible": False}, format="json").status_code, 403)

        self.auth(self.admin_token)
        res = self.client.put(url, {"is_visible": False, "moderator_comment": "spam"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(res.data["is_visible"])
        self.assertTrue(res.data["is_moderated"])

        res = self.client.get(reverse("executor-reviews", kwargs={"executor_id": self.exe.id}))
        self.assertEqual(res.data["count"], 0)
