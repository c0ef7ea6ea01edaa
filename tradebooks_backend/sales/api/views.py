# sales/api/views.py

"""
======================================================
PATH: sales/api/views.py
======================================================
SALES API

GET  /api/sales/customers/                    -> company customers
POST /api/sales/customers/                    -> create (sales.add_customer)
GET  /api/sales/sales/?status&customer_id     -> sales history
POST /api/sales/sales/                        -> create invoice (sales.add_sale)
GET  /api/sales/sales/<id>/                   -> sale with items
POST /api/sales/cart/preview/                 -> advisory totals

Checkout rules:
- Backend authoritative for prices, VAT and totals
- Every referenced id is looked up inside the current company
======================================================
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from accounting.api.serializers.reports import DocumentTotalsSerializer
from backend.query_params import int_param
from companies.api.mixins import CompanyScopedMixin, require_perm
from products.models import Warehouse
from products.services.inventory import get_company_products
from sales.api.serializers import (
    CartPreviewInputSerializer,
    CustomerSerializer,
    SaleCreateInputSerializer,
    SaleDetailSerializer,
    SaleSerializer,
)
from sales.models import Customer, Sale
from sales.services.cart import preview_cart
from sales.services.sale_service import create_sale, sales_for_company

logger = logging.getLogger(__name__)


class CustomerListCreateView(CompanyScopedMixin, GenericAPIView):
    serializer_class = CustomerSerializer

    def get_queryset(self):
        qs = Customer.objects.filter(company=self.company)
        search = (self.request.query_params.get("q") or "").strip()
        if search:
            qs = qs.filter(name__icontains=search)
        return qs.order_by("name")

    @extend_schema(tags=["sales"], responses=CustomerSerializer(many=True))
    def get(self, request):
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    @extend_schema(tags=["sales"], request=CustomerSerializer, responses={201: CustomerSerializer})
    def post(self, request):
        require_perm(request, "sales.add_customer", "You do not have permission to create customers.")

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = serializer.save(company=self.company)
        return Response(self.get_serializer(customer).data, status=status.HTTP_201_CREATED)


class SaleListCreateView(CompanyScopedMixin, GenericAPIView):
    serializer_class = SaleCreateInputSerializer

    @extend_schema(
        tags=["sales"],
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(name="customer_id", type=int, location=OpenApiParameter.QUERY, required=False),
        ],
        responses=SaleSerializer(many=True),
    )
    def get(self, request):
        status_filter = (request.query_params.get("status") or "").strip().upper() or None
        if status_filter and status_filter not in Sale.Status.values:
            raise ValidationError({"status": f"Invalid status: {status_filter}"})

        qs = sales_for_company(
            self.company,
            status=status_filter,
            customer_id=int_param(request, "customer_id"),
        )
        return Response(SaleSerializer(qs, many=True).data)

    @extend_schema(tags=["sales"], request=SaleCreateInputSerializer, responses={201: SaleDetailSerializer})
    def post(self, request):
        require_perm(request, "sales.add_sale", "You do not have permission to create sales.")

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        company = self.company
        customer = None
        if data["customer_id"] is not None:
            customer = get_object_or_404(Customer, pk=data["customer_id"], company=company)
        warehouse = get_object_or_404(Warehouse, pk=data["warehouse_id"], company=company)

        products = get_company_products(company, [i["product_id"] for i in data["items"]])
        items = [
            {
                "product": products[str(i["product_id"])],
                "quantity": i["quantity"],
                "unit_price": i["unit_price"],
            }
            for i in data["items"]
        ]

        sale = create_sale(
            context=self.get_company_context(),
            customer=customer,
            warehouse=warehouse,
            items=items,
            discount_percent=data["discount_percent"],
            tax_inclusive=data["tax_inclusive"],
            paid_amount=data["paid_amount"],
            invoice_date=data["invoice_date"],
            notes=data["notes"],
        )
        return Response(SaleDetailSerializer(sale).data, status=status.HTTP_201_CREATED)


class SaleDetailView(CompanyScopedMixin, GenericAPIView):
    serializer_class = SaleDetailSerializer

    @extend_schema(tags=["sales"], responses=SaleDetailSerializer)
    def get(self, request, pk):
        sale = get_object_or_404(
            Sale.objects.select_related("customer", "warehouse").prefetch_related("items__product"),
            pk=pk,
            company=self.company,
        )
        return Response(SaleDetailSerializer(sale).data)


class CartPreviewView(CompanyScopedMixin, GenericAPIView):
    serializer_class = CartPreviewInputSerializer

    @extend_schema(tags=["sales"], request=CartPreviewInputSerializer, responses=DocumentTotalsSerializer)
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        lines = [i for i in data["items"] if i["quantity"] > 0]
        products = get_company_products(self.company, [i["product_id"] for i in lines])
        priced = [
            {
                "quantity": i["quantity"],
                "unit_price": (
                    products[str(i["product_id"])].selling_price
                    if i["unit_price"] is None
                    else i["unit_price"]
                ),
            }
            for i in lines
        ]

        totals = preview_cart(
            priced,
            self.company.effective_vat_rate,
            discount_percent=data["discount_percent"],
            tax_inclusive=data["tax_inclusive"],
        )
        return Response(DocumentTotalsSerializer(totals).data)
