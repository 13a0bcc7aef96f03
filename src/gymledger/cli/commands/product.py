"""Inventory and point-of-sale commands."""

import click
from gymledger.cli.clock import cli_now
from gymledger.cli.error_handling import domain_errors
from gymledger.domain.entities import PaymentMethod
from gymledger.domain.errors import InsufficientStockError
from gymledger.domain.product import ProductService
from gymledger.domain.sales import SaleService
from gymledger.utils.amount_parser import parse_amount


@click.group()
def product_group():
    """Manage inventory products."""
    pass


@product_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--price", required=True, help="Unit price")
@click.option("--stock", type=int, default=0, show_default=True, help="Units in stock")
@click.option("--min-stock", type=int, default=0, show_default=True, help="Low-stock threshold")
@click.option("--category", help="Product category")
@click.pass_context
def create_product(ctx, name: str, price: str, stock: int, min_stock: int, category: str | None):
    """Create a product.

    Examples:
        gymledger product create "Water 500ml" --price 3.50 --stock 50 --category Drinks
    """
    db = ctx.obj["db"]
    service = ProductService(db)

    with domain_errors(ctx):
        product_id = service.create_product(
            name=name,
            price=parse_amount(price),
            stock_quantity=stock,
            min_stock_level=min_stock,
            category=category,
        )
    click.echo(f"Created product '{name}' (ID: {product_id})")


@product_group.command("list")
@click.option("--low", is_flag=True, help="Only products at or below their minimum stock")
@click.pass_context
def list_products(ctx, low: bool):
    """List products and stock levels."""
    db = ctx.obj["db"]
    service = ProductService(db)

    with domain_errors(ctx):
        products = service.low_stock_products() if low else service.list_products()
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 64)
    for p in products:
        flag = " LOW" if p.is_low_stock else ""
        click.echo(
            f"ID: {p.id:3d} | {p.name:20s} | {p.price:>8,.2f} | Stock: {p.stock_quantity:4d}{flag}"
        )


@product_group.command("restock")
@click.argument("product_id", type=int)
@click.argument("quantity", type=int)
@click.pass_context
def restock_product(ctx, product_id: int, quantity: int):
    """Add units to a product's stock."""
    db = ctx.obj["db"]
    service = ProductService(db)

    with domain_errors(ctx):
        product = service.restock(product_id, quantity)
    click.echo(f"'{product.name}' stock is now {product.stock_quantity}")


def _parse_line(value: str) -> tuple[int, int]:
    product_id, _, quantity = value.partition(":")
    try:
        return int(product_id), int(quantity or "1")
    except ValueError:
        raise click.BadParameter(f"'{value}' is not PRODUCT_ID[:QUANTITY]")


@click.command("sell")
@click.argument("lines", nargs=-1, required=True, metavar="PRODUCT_ID[:QUANTITY]...")
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
)
@click.pass_context
def sell(ctx, lines: tuple[str, ...], method: str):
    """Sell a cart of products. Nothing is sold unless every line is in stock.

    Examples:
        gymledger sell 1:2 3
        gymledger sell 2:1 --method card
    """
    db = ctx.obj["db"]
    service = SaleService(db)
    cart = [_parse_line(line) for line in lines]

    with domain_errors(ctx):
        try:
            receipt = service.commit_sale(cart, now=cli_now(ctx), method=PaymentMethod(method))
        except InsufficientStockError as e:
            click.echo(f"Sale cancelled: {e}", err=True)
            ctx.exit(1)

    products = {p.id: p for p in ProductService(db).list_products()}
    for sale in receipt.sales:
        name = products[sale.product_id].name if sale.product_id in products else sale.product_id
        click.echo(f"{sale.quantity} x {name}: {sale.total_price:,.2f}")
    click.echo(f"Total: {receipt.total:,.2f}")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
    cli.add_command(sell)
