import django_filters

from modules.orders.constants import OrderStatus, PaymentMethod
from modules.orders.models import OrderModel


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    customer = django_filters.UUIDFilter(field_name="customer_id")
    payment_method = django_filters.ChoiceFilter(choices=PaymentMethod.choices)
    start_date = django_filters.DateFilter(field_name="order_date", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="order_date", lookup_expr="date__lte")
    min_total = django_filters.NumberFilter(field_name="total", lookup_expr="gte")
    max_total = django_filters.NumberFilter(field_name="total", lookup_expr="lte")

    class Meta:
        model = OrderModel
        fields = [
            "status",
            "customer",
            "payment_method",
            "start_date",
            "end_date",
            "min_total",
            "max_total",
        ]
