import django_filters
from django.db.models import Q

from modules.customers.constants import CustomerStatus
from modules.customers.models import CustomerModel


class CustomerFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(method="filter_name")
    email = django_filters.CharFilter(field_name="email", lookup_expr="iexact")
    status = django_filters.ChoiceFilter(choices=CustomerStatus.choices)

    class Meta:
        model = CustomerModel
        fields = ["name", "email", "status"]

    def filter_name(self, queryset, name, value):
        return queryset.filter(
            Q(first_name__icontains=value) | Q(last_name__icontains=value)
        )
