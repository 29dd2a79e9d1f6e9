"""Admin Handlers: user moderation and read-only views of every collection.

Invariants:
    - user, product, order and review are gated to {Admin}
    - Administrators can never be banned; a failed ban leaves the target unchanged
"""

import logging

from market.core.domain_types import UserRole
from market.core.enforce_moderation import validate_ban_change
from market.core.errors import NotFoundError
from market.services.command_context import (
    MarketContext, ok, require_arg, run_action,
)
from market.services.command_registry import CommandRegistry
from market.services.format_listings import (
    user_table, product_table, order_table, review_table,
)

logger = logging.getLogger(__name__)

_ADMIN = (UserRole.ADMIN,)


class AdminHandlers:
    """Moderation and oversight commands."""

    def __init__(self, ctx: MarketContext):
        self.ctx = ctx
        self._user_actions = {
            "list": self._user_list,
            "ban": lambda args: self._set_banned(args, True),
            "unban": lambda args: self._set_banned(args, False),
        }
        self._product_actions = {"all": self._product_all}
        self._order_actions = {"all": self._order_all}
        self._review_actions = {"all": self._review_all}

    def user(self, args: list[str]) -> dict:
        return run_action(self._user_actions, args, "user list|ban|unban [user_id]")

    def product(self, args: list[str]) -> dict:
        return run_action(self._product_actions, args, "product all")

    def order(self, args: list[str]) -> dict:
        return run_action(self._order_actions, args, "order all")

    def review(self, args: list[str]) -> dict:
        return run_action(self._review_actions, args, "review all")

    # --- users -----------------------------------------------------------------

    def _user_list(self, args: list[str]) -> dict:
        users = self.ctx.repository.users.find_all()
        if not users:
            return ok("There are no users.", count=0)
        return ok(user_table(users), count=len(users))

    def _set_banned(self, args: list[str], banned: bool) -> dict:
        verb = "ban" if banned else "unban"
        user_id = require_arg(args, 1, f"user {verb} <user_id>")
        target = self.ctx.repository.users.find_by_id(user_id)
        if target is None:
            raise NotFoundError("User", user_id)
        error = validate_ban_change(target, banned)
        if error is not None:
            raise error
        self.ctx.repository.users.save(target.with_banned(banned))
        logger.info(
            f"User {verb}ned by admin",
            extra={"user_id": target.id},
        )
        return ok(f"User {verb}ned: {target.username}")

    # --- read-only views -------------------------------------------------------

    def _product_all(self, args: list[str]) -> dict:
        products = self.ctx.repository.products.find_all()
        if not products:
            return ok("There are no products.", count=0)
        return ok(
            product_table("All Products", products, with_seller=True),
            count=len(products),
        )

    def _order_all(self, args: list[str]) -> dict:
        orders = self.ctx.repository.orders.find_all()
        if not orders:
            return ok("There are no orders.", count=0)
        return ok(
            order_table("All Orders", orders, with_buyer=True, with_seller=True),
            count=len(orders),
        )

    def _review_all(self, args: list[str]) -> dict:
        reviews = self.ctx.repository.reviews.find_all()
        if not reviews:
            return ok("There are no reviews.", count=0)
        return ok(review_table(reviews), count=len(reviews))


def register_commands(registry: CommandRegistry, ctx: MarketContext) -> None:
    admin = AdminHandlers(ctx)
    registry.register("user", admin.user, "Users: list | ban | unban", _ADMIN)
    registry.register("product", admin.product, "Products: all", _ADMIN)
    registry.register("order", admin.order, "Orders: all", _ADMIN)
    registry.register("review", admin.review, "Reviews: all", _ADMIN)
