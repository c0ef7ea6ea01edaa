# products/api/views.py

"""
PATH: products/api/views.py

PRODUCTS & INVENTORY API

GET  /api/products/products/                       -> company products
POST /api/products/products/                       -> create (products.add_product)
GET  /api/products/warehouses/                     -> company warehouses
POST /api/products/warehouses/                     -> create (products.add_warehouse)
GET  /api/products/stock/?product_id&warehouse_id  -> live stock levels (per warehouse)
POST /api/products/stock/adjust/                   -> manual adjustment (products.change_stock)
GET  /api/products/stock/low/                      -> products with CRITICAL / WARNING totals
GET  /api/products/stock/movements/?product_id     -> movement history, newest first
GET  /api/products/reports/inventory/              -> quantity, value at cost, REORDER/OK

Stock quantities only change through products.services.inventory.
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db.models import Q
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.query_params import date_param
from companies.api.mixins import CompanyScopedMixin, require_perm
from products.api.serializers import (
    InventoryReportRowSerializer,
    LowStockItemSerializer,
    ProductSerializer,
    StockAdjustmentInputSerializer,
    StockMovementSerializer,
    StockSerializer,
    WarehouseSerializer,
)
from products.models import Product, Stock, Warehouse
from products.services.inventory import (
    adjust_stock,
    get_inventory_report,
    get_low_stock_items,
    get_stock_by_product,
    get_stock_movement_history,
)

logger = logging.getLogger(__name__)


class _CompanySerializerContextMixin(CompanyScopedMixin):
    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        ctx["company"] = self.company
        return ctx


class ProductListCreateView(_CompanySerializerContextMixin, GenericAPIView):
    serializer_class = ProductSerializer

    def get_queryset(self):
        qs = Product.objects.filter(company=self.company).select_related("category")
        if self.request.query_params.get("include_inactive") != "1":
            qs = qs.filter(is_active=True)

        search = (self.request.query_params.get("q") or "").strip()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(sku__icontains=search))
        return qs.order_by("name")

    @extend_schema(tags=["products"], responses=ProductSerializer(many=True))
    def get(self, request):
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    @extend_schema(tags=["products"], request=ProductSerializer, responses={201: ProductSerializer})
    def post(self, request):
        require_perm(request, "products.add_product", "You do not have permission to create products.")

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.save(company=self.company)

        logger.info("Product %s created for company=%s", product.sku, self.company.pk)
        return Response(self.get_serializer(product).data, status=status.HTTP_201_CREATED)


class WarehouseListCreateView(_CompanySerializerContextMixin, GenericAPIView):
    serializer_class = WarehouseSerializer

    def get_queryset(self):
        return Warehouse.objects.filter(company=self.company).order_by("name")

    @extend_schema(tags=["products"], responses=WarehouseSerializer(many=True))
    def get(self, request):
        return Response(self.get_serializer(self.get_queryset(), many=True).data)

    @extend_schema(tags=["products"], request=WarehouseSerializer, responses={201: WarehouseSerializer})
    def post(self, request):
        require_perm(request, "products.add_warehouse", "You do not have permission to create warehouses.")

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        warehouse = serializer.save(company=self.company)
        return Response(self.get_serializer(warehouse).data, status=status.HTTP_201_CREATED)


@extend_schema(
    tags=["inventory"],
    parameters=[
        OpenApiParameter(name="product_id", type=str, location=OpenApiParameter.QUERY, required=False),
        OpenApiParameter(name="warehouse_id", type=int, location=OpenApiParameter.QUERY, required=False),
    ],
    responses=StockSerializer(many=True),
)
class StockListView(CompanyScopedMixin, APIView):
    def get(self, request):
        product_id = (request.query_params.get("product_id") or "").strip()
        if product_id:
            qs = get_stock_by_product(get_object_or_404(Product, pk=product_id, company=self.company))
        else:
            qs = (
                Stock.objects.filter(product__company=self.company)
                .select_related("product", "warehouse")
                .order_by("product__name", "warehouse__name")
            )

        warehouse_id = (request.query_params.get("warehouse_id") or "").strip()
        if warehouse_id:
            qs = qs.filter(warehouse=get_object_or_404(Warehouse, pk=warehouse_id, company=self.company))

        return Response(StockSerializer(qs, many=True).data)


class StockAdjustView(CompanyScopedMixin, GenericAPIView):
    serializer_class = StockAdjustmentInputSerializer

    @extend_schema(
        tags=["inventory"],
        request=StockAdjustmentInputSerializer,
        responses={201: StockMovementSerializer},
    )
    def post(self, request):
        require_perm(request, "products.change_stock", "You do not have permission to adjust stock.")

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        product = get_object_or_404(Product, pk=data["product_id"], company=self.company)
        warehouse = get_object_or_404(Warehouse, pk=data["warehouse_id"], company=self.company)

        movement = adjust_stock(
            product=product,
            warehouse=warehouse,
            quantity_delta=data["quantity_delta"],
            reason=data["reason"],
            user=request.user,
        )
        return Response(StockMovementSerializer(movement).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["inventory"], responses=LowStockItemSerializer(many=True))
class LowStockView(CompanyScopedMixin, APIView):
    def get(self, request):
        return Response(LowStockItemSerializer(get_low_stock_items(self.company), many=True).data)


@extend_schema(
    tags=["inventory"],
    parameters=[
        OpenApiParameter(name="product_id", type=str, location=OpenApiParameter.QUERY, required=True),
        OpenApiParameter(name="start_date", type=str, location=OpenApiParameter.QUERY, required=False),
        OpenApiParameter(name="end_date", type=str, location=OpenApiParameter.QUERY, required=False),
    ],
    responses=StockMovementSerializer(many=True),
)
class StockMovementHistoryView(CompanyScopedMixin, APIView):
    def get(self, request):
        product_id = (request.query_params.get("product_id") or "").strip()
        if not product_id:
            raise ValidationError({"product_id": "product_id is required"})
        product = get_object_or_404(Product, pk=product_id, company=self.company)

        movements = get_stock_movement_history(
            product,
            date_param(request, "start_date"),
            date_param(request, "end_date"),
        )
        return Response(StockMovementSerializer(movements, many=True).data)


@extend_schema(tags=["inventory"], responses=InventoryReportRowSerializer(many=True))
class InventoryReportView(CompanyScopedMixin, APIView):
    def get(self, request):
        return Response(InventoryReportRowSerializer(get_inventory_report(self.company), many=True).data)
