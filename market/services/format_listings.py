"""Listing Formatters: fixed-width text tables for products, orders, users and reviews.

Invariants:
    - All functions are pure: entities in, text out
    - Over-long cells are truncated with "..." to the column width
    - Every table ends with a "<n> <noun>" count line
"""

from decimal import Decimal
from typing import Sequence

from market.core.entities import User, Product, Order, Review

_RULE = "-"


def truncate(text: str | None, max_len: int) -> str:
    if not text:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def money(amount: Decimal) -> str:
    return f"¥{amount}"


def timestamp(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "-"


def format_table(
    title: str, columns: Sequence[tuple[str, int]], rows: Sequence[Sequence[str]],
    noun: str,
) -> str:
    """Render a titled fixed-width table. columns = [(header, width), ...]."""
    widths = [w for _, w in columns]
    lines = [f"=== {title} ==="]
    lines.append(" ".join(h.ljust(w) for h, w in columns).rstrip())
    lines.append(_RULE * (sum(widths) + len(widths) - 1))
    for row in rows:
        cells = [truncate(str(c), w).ljust(w) for c, w in zip(row, widths)]
        lines.append(" ".join(cells).rstrip())
    lines.append("")
    lines.append(f"{len(rows)} {noun}")
    return "\n".join(lines)


def product_table(
    title: str, products: Sequence[Product], with_seller: bool = False,
) -> str:
    columns = [("Product ID", 14), ("Name", 20), ("Category", 15), ("Price", 10)]
    if with_seller:
        columns.append(("Seller ID", 14))
    columns.append(("Status", 10))
    rows = []
    for p in products:
        row = [p.id, p.name, p.category, money(p.price)]
        if with_seller:
            row.append(p.seller_id)
        row.append(p.status.display_name)
        rows.append(row)
    return format_table(title, columns, rows, "product(s)")


def order_table(
    title: str, orders: Sequence[Order],
    with_buyer: bool = False, with_seller: bool = False,
) -> str:
    columns = [("Order ID", 14), ("Product ID", 14)]
    if with_buyer:
        columns.append(("Buyer ID", 14))
    if with_seller:
        columns.append(("Seller ID", 14))
    columns += [("Amount", 12), ("Status", 18)]
    rows = []
    for o in orders:
        row = [o.id, o.product_id]
        if with_buyer:
            row.append(o.buyer_id)
        if with_seller:
            row.append(o.seller_id)
        row += [money(o.price), o.status.display_name]
        rows.append(row)
    return format_table(title, columns, rows, "order(s)")


def user_table(users: Sequence[User]) -> str:
    columns = [("User ID", 14), ("Username", 20), ("Role", 8), ("Status", 8), ("Created", 19)]
    rows = [
        [u.id, u.username, u.role.display_name,
         "Banned" if u.banned else "Active", timestamp(u.created_at)]
        for u in users
    ]
    return format_table("Users", columns, rows, "user(s)")


def review_table(reviews: Sequence[Review]) -> str:
    columns = [("Review ID", 14), ("Order ID", 14), ("Buyer ID", 14), ("Rating", 6), ("Comment", 30)]
    rows = [[r.id, r.order_id, r.buyer_id, r.stars, r.comment] for r in reviews]
    return format_table("Reviews", columns, rows, "review(s)")


def product_detail(product: Product, reviews: Sequence[Review]) -> str:
    lines = [
        "=== Product Detail ===",
        f"Product ID:  {product.id}",
        f"Name:        {product.name}",
        f"Description: {product.description}",
        f"Category:    {product.category}",
        f"Price:       {money(product.price)}",
        f"Status:      {product.status.display_name}",
        f"Seller ID:   {product.seller_id}",
        f"Listed at:   {timestamp(product.created_at)}",
    ]
    if reviews:
        lines += ["", "=== Reviews ==="]
        for r in reviews:
            lines += [
                f"Rating:  {r.stars}",
                f"Comment: {r.comment}",
                f"Date:    {timestamp(r.created_at)}",
                _RULE * 50,
            ]
    return "\n".join(lines)
