# purchases/api/views.py

"""
PATH: purchases/api/views.py

PURCHASES API

GET  /api/purchases/vendors/          -> company vendors
POST /api/purchases/vendors/          -> create (purchases.add_vendor)
GET  /api/purchases/purchases/        -> purchase history (?status&vendor_id)
POST /api/purchases/purchases/        -> create + receive (purchases.add_purchase)
GET  /api/purchases/purchases/<id>/   -> purchase with items
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response

from backend.query_params import int_param
from companies.api.mixins import CompanyScopedMixin, require_perm
from products.models import Warehouse
from products.services.inventory import get_company_products
from purchases.api.serializers import (
    PurchaseCreateInputSerializer,
    PurchaseDetailSerializer,
    PurchaseSerializer,
    VendorSerializer,
)
from purchases.models import Purchase, Vendor
from purchases.services.purchase_service import create_purchase


class VendorListCreateView(CompanyScopedMixin, GenericAPIView):
    serializer_class = VendorSerializer

    def get_queryset(self):
        return Vendor.objects.filter(company=self.company).order_by("name")

    @extend_schema(tags=["purchases"], responses=VendorSerializer(many=True))
    def get(self, request):
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    @extend_schema(tags=["purchases"], request=VendorSerializer, responses={201: VendorSerializer})
    def post(self, request):
        require_perm(request, "purchases.add_vendor", "You do not have permission to create vendors.")

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vendor = serializer.save(company=self.company)
        return Response(self.get_serializer(vendor).data, status=status.HTTP_201_CREATED)


class PurchaseListCreateView(CompanyScopedMixin, GenericAPIView):
    serializer_class = PurchaseCreateInputSerializer

    @extend_schema(tags=["purchases"], responses=PurchaseSerializer(many=True))
    def get(self, request):
        qs = Purchase.objects.filter(company=self.company).select_related("vendor", "warehouse")

        status_filter = (request.query_params.get("status") or "").strip().upper()
        if status_filter:
            if status_filter not in Purchase.Status.values:
                raise ValidationError({"status": f"Invalid status: {status_filter}"})
            qs = qs.filter(status=status_filter)

        vendor_id = int_param(request, "vendor_id")
        if vendor_id:
            qs = qs.filter(vendor_id=vendor_id)

        return Response(PurchaseSerializer(qs.order_by("-po_date", "-created_at"), many=True).data)

    @extend_schema(
        tags=["purchases"],
        request=PurchaseCreateInputSerializer,
        responses={201: PurchaseDetailSerializer},
    )
    def post(self, request):
        require_perm(request, "purchases.add_purchase", "You do not have permission to create purchases.")

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        company = self.company
        vendor = get_object_or_404(Vendor, pk=data["vendor_id"], company=company)
        warehouse = get_object_or_404(Warehouse, pk=data["warehouse_id"], company=company)
        products = get_company_products(company, [i["product_id"] for i in data["items"]])

        purchase = create_purchase(
            context=self.get_company_context(),
            vendor=vendor,
            warehouse=warehouse,
            items=[
                {
                    "product": products[str(i["product_id"])],
                    "quantity": i["quantity"],
                    "unit_cost": i["unit_cost"],
                }
                for i in data["items"]
            ],
            discount_percent=data["discount_percent"],
            tax_inclusive=data["tax_inclusive"],
            po_date=data["po_date"],
            notes=data["notes"],
        )
        return Response(PurchaseDetailSerializer(purchase).data, status=status.HTTP_201_CREATED)


class PurchaseDetailView(CompanyScopedMixin, GenericAPIView):
    serializer_class = PurchaseDetailSerializer

    @extend_schema(tags=["purchases"], responses=PurchaseDetailSerializer)
    def get(self, request, pk):
        purchase = get_object_or_404(
            Purchase.objects.select_related("vendor", "warehouse").prefetch_related("items__product"),
            pk=pk,
            company=self.company,
        )
        return Response(PurchaseDetailSerializer(purchase).data)
