import django_filters
from django.db.models import Q

from modules.books.constants import BookCategory, BookStatus
from modules.books.models import BookModel


class BookFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    category = django_filters.ChoiceFilter(choices=BookCategory.choices)
    status = django_filters.ChoiceFilter(choices=BookStatus.choices)
    author = django_filters.CharFilter(field_name="author", lookup_expr="icontains")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = BookModel
        fields = ["search", "category", "status", "author", "min_price", "max_price"]

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(title__icontains=value) | Q(author__icontains=value))
