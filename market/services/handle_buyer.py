"""Buyer Handlers: search, product detail, order placement/receipt and reviews.

Invariants:
    - search, product and order are gated to {Buyer, Seller, Admin}; review to {Buyer}
    - search only returns Available products
    - Keyword match is a case-sensitive substring of name, description or category
    - State changes go through the lifecycle engine, never straight to the store
"""

from market.core.domain_types import UserRole, ProductStatus
from market.core.entities import Product
from market.schemas.forms import SearchFilters, ReviewInput, parse_input
from market.services.command_context import (
    MarketContext, ok, require_arg, run_action,
)
from market.services.command_registry import CommandRegistry
from market.services.format_listings import (
    product_table, order_table, product_detail, money,
)

_SHOPPERS = (UserRole.BUYER, UserRole.SELLER, UserRole.ADMIN)


def matches_filters(product: Product, filters: SearchFilters) -> bool:
    if product.status != ProductStatus.AVAILABLE:
        return False
    keyword = filters.keyword
    if keyword and not (
        keyword in product.name
        or keyword in product.description
        or keyword in product.category
    ):
        return False
    if filters.min_price is not None and product.price < filters.min_price:
        return False
    if filters.max_price is not None and product.price > filters.max_price:
        return False
    return True


class BuyerHandlers:
    """Commands for anyone shopping on the market."""

    def __init__(self, ctx: MarketContext):
        self.ctx = ctx
        self._product_actions = {
            "detail": self._product_detail,
        }
        self._order_actions = {
            "create": self._order_create,
            "my": self._order_my,
            "confirm-receive": self._order_confirm_receive,
        }
        self._review_actions = {
            "add": self._review_add,
        }

    def search(self, args: list[str]) -> dict:
        filters = parse_input(
            SearchFilters,
            keyword=args[0] if args else "",
            min_price=args[1] if len(args) > 1 else None,
            max_price=args[2] if len(args) > 2 else None,
        )
        results = self.ctx.repository.products.find_by(
            lambda p: matches_filters(p, filters),
        )
        if not results:
            return ok("No matching products found.", count=0)
        return ok(product_table("Search Results", results), count=len(results))

    def product(self, args: list[str]) -> dict:
        return run_action(self._product_actions, args, "product detail <product_id>")

    def order(self, args: list[str]) -> dict:
        return run_action(
            self._order_actions, args, "order create|my|confirm-receive ...",
        )

    def review(self, args: list[str]) -> dict:
        return run_action(
            self._review_actions, args, "review add <order_id> <rating 1-5> <comment>",
        )

    # --- sub-actions -----------------------------------------------------------

    def _product_detail(self, args: list[str]) -> dict:
        product_id = require_arg(args, 1, "product detail <product_id>")
        product = self.ctx.lifecycle.require_product(product_id)
        reviews = self.ctx.repository.reviews.find_by(
            lambda r: r.product_id == product.id,
        )
        return ok(product_detail(product, reviews))

    def _order_create(self, args: list[str]) -> dict:
        product_id = require_arg(args, 1, "order create <product_id>")
        order = self.ctx.lifecycle.place_order(self.ctx.actor(), product_id)
        product = self.ctx.repository.products.find_by_id(order.product_id)
        return ok(
            f"Order created.\nOrder ID: {order.id}\n"
            f"Product: {product.name if product else order.product_id}\n"
            f"Amount: {money(order.price)}\n"
            "Waiting for the seller to ship.",
            order_id=order.id,
        )

    def _order_my(self, args: list[str]) -> dict:
        me = self.ctx.actor()
        orders = self.ctx.repository.orders.find_by(lambda o: o.buyer_id == me.id)
        if not orders:
            return ok("You have no orders yet.", count=0)
        return ok(order_table("My Orders", orders), count=len(orders))

    def _order_confirm_receive(self, args: list[str]) -> dict:
        order_id = require_arg(args, 1, "order confirm-receive <order_id>")
        order = self.ctx.lifecycle.confirm_receipt(self.ctx.actor().id, order_id)
        return ok(
            "Receipt confirmed.\n"
            f"You can now review this order: review add {order.id} <rating 1-5> <comment>",
            order_id=order.id,
        )

    def _review_add(self, args: list[str]) -> dict:
        usage = "review add <order_id> <rating 1-5> <comment>"
        require_arg(args, 3, usage)
        data = parse_input(
            ReviewInput,
            order_id=args[1], rating=args[2], comment=" ".join(args[3:]),
        )
        review = self.ctx.lifecycle.submit_review(
            self.ctx.actor().id, data.order_id, data.rating, data.comment,
        )
        return ok(
            f"Review added.\nRating: {review.stars}\nComment: {review.comment}",
            review_id=review.id,
        )


def register_commands(registry: CommandRegistry, ctx: MarketContext) -> None:
    buyer = BuyerHandlers(ctx)
    registry.register(
        "search", buyer.search,
        "Search products [keyword] [min_price] [max_price]", _SHOPPERS,
    )
    registry.register("product", buyer.product, "Product detail", _SHOPPERS)
    registry.register(
        "order", buyer.order, "Orders: create | my | confirm-receive", _SHOPPERS,
    )
    registry.register("review", buyer.review, "Reviews: add", (UserRole.BUYER,))
