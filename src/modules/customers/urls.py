"""Customer routes; the trailing slash is optional."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.customers.views import CustomerViewSet

router = SimpleRouter()
router.trailing_slash = "/?"
router.register("customers", CustomerViewSet, basename="customer")

urlpatterns = router.urls
