# products/tests/factories.py

from decimal import Decimal

from products.models import Product, Stock, Warehouse


def make_warehouse(company, name="Main Warehouse") -> Warehouse:
    return Warehouse.objects.create(company=company, name=name)


def make_product(
    company,
    sku="LAP-001",
    *,
    name="Laptop",
    selling_price=Decimal("3500.00"),
    cost_price=Decimal("2500.00"),
    reorder_level=5,
) -> Product:
    return Product.objects.create(
        company=company,
        sku=sku,
        name=name,
        selling_price=selling_price,
        cost_price=cost_price,
        reorder_level=reorder_level,
    )


def set_stock(product, warehouse, quantity) -> Stock:
    stock, _ = Stock.objects.update_or_create(
        product=product,
        warehouse=warehouse,
        defaults={"quantity": quantity},
    )
    return stock
