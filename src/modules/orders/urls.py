"""Order routes; the trailing slash is optional."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.orders.views import OrderViewSet

router = SimpleRouter()
router.trailing_slash = "/?"
router.register("orders", OrderViewSet, basename="order")

urlpatterns = router.urls
