from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Order
from marketplace.tests.factories import ListingFactory, OrderFactory, OrderItemFactory, ReviewFactory, UserFactory


class ReviewViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.listing = ListingFactory()
        self.order = OrderFactory(user=self.user, status=Order.STATUS_PAID)
        OrderItemFactory(order=self.order, listing=self.listing)
        self.client.force_authenticate(user=self.user)

        self.review_create_url = reverse("marketplace:review-list")
        self.product_reviews_url = reverse("marketplace:review-product", args=[self.listing.product_id])

    def payload(self, **overrides):
        data = {
            "orderId": str(self.order.id),
            "productId": str(self.listing.product_id),
            "vendorId": str(self.listing.vendor_id),
            "rating": 5,
            "comment": "Lovely finish",
        }
        data.update(overrides)
        return data

    def test_create_review(self):
        response = self.client.post(self.review_create_url, self.payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["rating"], 5)
        self.assertEqual(response.data["store_name"], self.listing.vendor.store_name)

    def test_duplicate_review(self):
        self.client.post(self.review_create_url, self.payload(), format="json")

        response = self.client.post(self.review_create_url, self.payload(rating=2), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "review_exists")

    def test_rating_out_of_range(self):
        response = self.client.post(self.review_create_url, self.payload(rating=6), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unpaid_order(self):
        self.order.status = Order.STATUS_PENDING
        self.order.save()

        response = self.client.post(self.review_create_url, self.payload(), format="json")

        self.assertEqual(response.data["error"], "order_not_eligible")

    def test_product_reviews_public_and_invalidated(self):
        anonymous = APIClient()
        self.assertEqual(anonymous.get(self.product_reviews_url)["X-Cache"], "MISS")
        self.assertEqual(anonymous.get(self.product_reviews_url)["X-Cache"], "HIT")

        self.client.post(self.review_create_url, self.payload(), format="json")

        response = anonymous.get(self.product_reviews_url)
        self.assertEqual(response["X-Cache"], "MISS")
        self.assertEqual(response.data["totalReviews"], 1)
        self.assertEqual(response.data["averageRating"], 5.0)

    def test_update_and_delete_own_review(self):
        review = ReviewFactory(user=self.user, product=self.listing.product, vendor=self.listing.vendor)
        detail_url = reverse("marketplace:review-detail", args=[review.id])

        updated = self.client.put(detail_url, {"comment": "Changed my mind"}, format="json")
        self.assertEqual(updated.status_code, status.HTTP_200_OK)
        self.assertEqual(updated.data["comment"], "Changed my mind")

        self.assertEqual(self.client.delete(detail_url).status_code, status.HTTP_204_NO_CONTENT)

    def test_cannot_touch_someone_elses_review(self):
        review = ReviewFactory()

        response = self.client.put(
            reverse("marketplace:review-detail", args=[review.id]), {"rating": 1}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_my_reviews(self):
        ReviewFactory(user=self.user)
        ReviewFactory()

        response = self.client.get(reverse("marketplace:review-my-reviews"))

        self.assertEqual(len(response.data), 1)

    def test_vendor_reviews(self):
        ReviewFactory(vendor=self.listing.vendor, rating=4)
        self.client.force_authenticate(user=self.listing.vendor.user)

        response = self.client.get(reverse("marketplace:review-vendor-reviews"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalReviews"], 1)
