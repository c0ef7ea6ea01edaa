# products/api/urls.py

from django.urls import path

from products.api.views import (
    InventoryReportView,
    LowStockView,
    ProductListCreateView,
    StockAdjustView,
    StockListView,
    StockMovementHistoryView,
    WarehouseListCreateView,
)

urlpatterns = [
    path("products/", ProductListCreateView.as_view(), name="products"),
    path("warehouses/", WarehouseListCreateView.as_view(), name="warehouses"),
    path("stock/", StockListView.as_view(), name="stock"),
    path("stock/adjust/", StockAdjustView.as_view(), name="stock-adjust"),
    path("stock/low/", LowStockView.as_view(), name="stock-low"),
    path("stock/movements/", StockMovementHistoryView.as_view(), name="stock-movements"),
    path("reports/inventory/", InventoryReportView.as_view(), name="inventory-report"),
]
