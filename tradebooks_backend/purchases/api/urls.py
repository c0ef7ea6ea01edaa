# purchases/api/urls.py

from django.urls import path

from purchases.api.views import PurchaseDetailView, PurchaseListCreateView, VendorListCreateView

urlpatterns = [
    path("vendors/", VendorListCreateView.as_view(), name="vendors"),
    path("purchases/", PurchaseListCreateView.as_view(), name="purchases"),
    path("purchases/<uuid:pk>/", PurchaseDetailView.as_view(), name="purchase-detail"),
]
