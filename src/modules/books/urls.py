"""Book routes; the trailing slash is optional."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.books.views import BookViewSet

router = SimpleRouter()
router.trailing_slash = "/?"
router.register("books", BookViewSet, basename="book")

urlpatterns = router.urls
