# companies/api/urls.py

from django.urls import path

from companies.api.views import InvoiceSeriesListCreateView, MyCompaniesView

urlpatterns = [
    path("me/", MyCompaniesView.as_view(), name="my-companies"),
    path("series/", InvoiceSeriesListCreateView.as_view(), name="invoice-series"),
]
