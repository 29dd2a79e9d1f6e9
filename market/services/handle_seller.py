"""Seller Handlers: listing management and order shipping.

Invariants:
    - product and order are gated to {Seller}
    - product edit checks ownership and Available status before prompting
    - product my hides Removed listings
"""

from market.core.domain_types import UserRole, ProductStatus
from market.schemas.forms import ProductForm, ProductEdit, parse_input
from market.services.command_context import (
    MarketContext, ok, require_arg, run_action,
)
from market.services.command_registry import CommandRegistry
from market.services.format_listings import product_table, order_table, money

_SELLER = (UserRole.SELLER,)


class SellerHandlers:
    """Commands for users selling on the market."""

    def __init__(self, ctx: MarketContext):
        self.ctx = ctx
        self._product_actions = {
            "add": self._product_add,
            "my": self._product_my,
            "edit": self._product_edit,
            "remove": self._product_remove,
        }
        self._order_actions = {
            "for-me": self._order_for_me,
            "confirm-ship": self._order_confirm_ship,
        }

    def product(self, args: list[str]) -> dict:
        return run_action(self._product_actions, args, "product add|my|edit|remove ...")

    def order(self, args: list[str]) -> dict:
        return run_action(self._order_actions, args, "order for-me|confirm-ship ...")

    # --- products --------------------------------------------------------------

    def _product_add(self, args: list[str]) -> dict:
        ask = self.ctx.prompt.ask
        form = parse_input(
            ProductForm,
            name=ask("Product name"),
            description=ask("Description"),
            category=ask("Category"),
            price=ask("Price"),
        )
        product = self.ctx.lifecycle.list_product(
            self.ctx.actor(), form.name, form.description, form.category, form.price,
        )
        return ok(
            f"Product listed.\nProduct ID: {product.id}\n"
            f"Name: {product.name}\nPrice: {money(product.price)}",
            product_id=product.id,
        )

    def _product_my(self, args: list[str]) -> dict:
        me = self.ctx.actor()
        products = self.ctx.repository.products.find_by(
            lambda p: p.seller_id == me.id and p.status != ProductStatus.REMOVED,
        )
        if not products:
            return ok("You have not listed any products yet.", count=0)
        return ok(product_table("My Products", products), count=len(products))

    def _product_edit(self, args: list[str]) -> dict:
        product_id = require_arg(args, 1, "product edit <product_id>")
        actor_id = self.ctx.actor().id
        current = self.ctx.lifecycle.editable_product(actor_id, product_id)
        self.ctx.emit("Leave a field blank to keep its current value.")
        ask = self.ctx.prompt.ask
        edit = parse_input(
            ProductEdit,
            name=ask(f"Product name [{current.name}]"),
            description=ask(f"Description [{current.description}]"),
            category=ask(f"Category [{current.category}]"),
            price=ask(f"Price [{current.price}]"),
        )
        updated = self.ctx.lifecycle.edit_product(
            actor_id, current.id, **edit.model_dump(),
        )
        return ok("Product updated.", product_id=updated.id)

    def _product_remove(self, args: list[str]) -> dict:
        product_id = require_arg(args, 1, "product remove <product_id>")
        product = self.ctx.lifecycle.retire_product(self.ctx.actor().id, product_id)
        return ok("Product removed from sale.", product_id=product.id)

    # --- orders ----------------------------------------------------------------

    def _order_for_me(self, args: list[str]) -> dict:
        me = self.ctx.actor()
        orders = self.ctx.repository.orders.find_by(lambda o: o.seller_id == me.id)
        if not orders:
            return ok("No orders yet.", count=0)
        return ok(
            order_table("My Sales", orders, with_buyer=True), count=len(orders),
        )

    def _order_confirm_ship(self, args: list[str]) -> dict:
        order_id = require_arg(args, 1, "order confirm-ship <order_id>")
        order = self.ctx.lifecycle.ship_order(self.ctx.actor().id, order_id)
        return ok(
            "Shipment confirmed.\nWaiting for the buyer to confirm receipt.",
            order_id=order.id,
        )


def register_commands(registry: CommandRegistry, ctx: MarketContext) -> None:
    seller = SellerHandlers(ctx)
    registry.register(
        "product", seller.product, "Products: add | my | edit | remove", _SELLER,
    )
    registry.register("order", seller.order, "Orders: for-me | confirm-ship", _SELLER)
