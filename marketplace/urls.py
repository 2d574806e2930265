from rest_framework.routers import DefaultRouter

from marketplace.cart.api.views import CartViewSet
from marketplace.catalog.api.views import ProductViewSet, ReviewViewSet
from marketplace.moderation.api.views import AdminViewSet, ReportViewSet, SupportViewSet
from marketplace.ordering.api.views import OrderViewSet
from marketplace.vendors.api.views import StoreViewSet, VendorViewSet

router = DefaultRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"vendors", VendorViewSet, basename="vendor")
router.register(r"stores", StoreViewSet, basename="store")
router.register(r"cart", CartViewSet, basename="cart")
router.register(r"orders", OrderViewSet, basename="order")
router.register(r"reviews", ReviewViewSet, basename="review")
router.register(r"reports", ReportViewSet, basename="report")
router.register(r"admin", AdminViewSet, basename="admin")
router.register(r"support", SupportViewSet, basename="support")

app_name = "marketplace"

urlpatterns = router.urls
