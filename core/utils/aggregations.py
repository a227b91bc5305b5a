from decimal import Decimal

from django.db.models import Sum


def sum_field(qs, field):
    """
    Sum of ``field`` over a queryset, Decimal("0") when empty.
    """
    return qs.aggregate(total=Sum(field))["total"] or Decimal("0")
