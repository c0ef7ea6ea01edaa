# sales/api/urls.py

from django.urls import path

from sales.api.views import (
    CartPreviewView,
    CustomerListCreateView,
    SaleDetailView,
    SaleListCreateView,
)

urlpatterns = [
    path("customers/", CustomerListCreateView.as_view(), name="customers"),
    path("sales/", SaleListCreateView.as_view(), name="sales"),
    path("sales/<uuid:pk>/", SaleDetailView.as_view(), name="sale-detail"),
    path("cart/preview/", CartPreviewView.as_view(), name="cart-preview"),
]
