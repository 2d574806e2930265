from django.test import TestCase

from marketplace.models import Order, Review
from marketplace.services import ErrorCodes, ReviewService
from marketplace.tests.factories import ListingFactory, OrderFactory, OrderItemFactory, ReviewFactory, UserFactory


class ReviewServiceTest(TestCase):
    def setUp(self):
        self.service = ReviewService()
        self.user = UserFactory()
        self.listing = ListingFactory()
        self.order = OrderFactory(user=self.user, status=Order.STATUS_PAID)
        OrderItemFactory(order=self.order, listing=self.listing)

    def review(self, **overrides):
        args = {
            "order_id": self.order.id,
            "product_id": self.listing.product_id,
            "vendor_id": self.listing.vendor_id,
            "rating": 4,
            "comment": "Solid build",
        }
        args.update(overrides)
        return self.service.create_review(self.user, **args)

    def test_verified_purchase_can_review(self):
        result = self.review()

        self.assertTrue(result.ok)
        self.assertEqual(result.value.listing_id, self.listing.id)
        self.assertTrue(result.value.is_verified)

    def test_second_review_for_same_order_rejected(self):
        self.review()

        result = self.review(rating=1)

        self.assertEqual(result.error, ErrorCodes.REVIEW_EXISTS)
        self.assertEqual(Review.objects.count(), 1)

    def test_pending_order_not_eligible(self):
        self.order.status = Order.STATUS_PENDING
        self.order.save()

        self.assertEqual(self.review().error, ErrorCodes.ORDER_NOT_ELIGIBLE)

    def test_someone_elses_order_not_eligible(self):
        result = self.service.create_review(
            UserFactory(), self.order.id, self.listing.product_id, self.listing.vendor_id, 5
        )
        self.assertEqual(result.error, ErrorCodes.ORDER_NOT_ELIGIBLE)

    def test_product_from_other_vendor_not_in_order(self):
        other = ListingFactory(product=self.listing.product)

        result = self.review(vendor_id=other.vendor_id)

        self.assertEqual(result.error, ErrorCodes.PRODUCT_NOT_IN_ORDER)

    def test_delivered_order_is_eligible(self):
        self.order.status = Order.STATUS_DELIVERED
        self.order.save()

        self.assertTrue(self.review().ok)

    def test_product_reviews_summary_and_distribution(self):
        self.review(rating=5)
        ReviewFactory(product=self.listing.product, vendor=self.listing.vendor, rating=2)

        result = self.service.list_product_reviews(self.listing.product_id, sort="lowest")

        self.assertEqual([review.rating for review in result.value["reviews"]], [2, 5])
        self.assertEqual(result.value["averageRating"], 3.5)
        self.assertEqual(result.value["totalReviews"], 2)
        self.assertEqual(result.value["ratingDistribution"], {"1": 0, "2": 1, "3": 0, "4": 0, "5": 1})

    def test_unknown_sort(self):
        result = self.service.list_product_reviews(self.listing.product_id, sort="random")
        self.assertEqual(result.error, ErrorCodes.VALIDATION_ERROR)

    def test_only_author_updates_or_deletes(self):
        review = self.review().value
        stranger = UserFactory()

        self.assertEqual(
            self.service.update_review(stranger, review.id, {"rating": 1}).error, ErrorCodes.REVIEW_NOT_FOUND
        )
        self.assertEqual(self.service.delete_review(stranger, review.id).error, ErrorCodes.REVIEW_NOT_FOUND)

        updated = self.service.update_review(self.user, review.id, {"rating": 2})
        self.assertEqual(updated.value.rating, 2)
        self.assertEqual(updated.value.comment, "Solid build")

        self.assertTrue(self.service.delete_review(self.user, review.id).ok)
        self.assertFalse(Review.objects.exists())

    def test_vendor_reviews(self):
        self.review(rating=3)

        result = self.service.vendor_reviews(self.listing.vendor)

        self.assertEqual(result.value["totalReviews"], 1)
        self.assertEqual(result.value["averageRating"], 3.0)
