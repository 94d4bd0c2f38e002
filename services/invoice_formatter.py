"""
Invoice Formatter Service

Renders invoices from frozen order snapshots. Line totals and promotion notes
are re-derived with the same pair promotion rule the cart uses, from the
stored original_price/price/quantity/pair_price only, so historical invoices
stay reproducible after campaigns end.
"""

import logging

from exceptions.pricing import PricingInvariantViolationException
from models.order import OrderDTO
from models.orderItem import OrderItemDTO
from models.pricing import LineTotalDTO
from services.pricing import PricingService
from utils.money import format_money, to_money

logger = logging.getLogger(__name__)


class InvoiceFormatterService:
    """Plain-text invoice rendering (PDF/HTML templates consume the same lines)."""

    @staticmethod
    def reprice_order_item(item: OrderItemDTO) -> LineTotalDTO:
        """
        Re-derive a stored line.

        Raises:
            PricingInvariantViolationException: Snapshot total does not match the re-derived total
        """
        split = PricingService.compute_line_total(
            unit_price=item.price,
            category=item.category,
            quantity=item.quantity,
            pair_price=item.pair_price
        )
        if split.line_total != to_money(item.line_total):
            logger.error(
                f"[Invoice] Snapshot mismatch for '{item.name}': stored {item.line_total}, "
                f"re-derived {split.line_total}"
            )
            raise PricingInvariantViolationException(
                "order snapshot does not match re-derived line total",
                stored=item.line_total,
                derived=split.line_total
            )
        return split

    @staticmethod
    def format_promotion_note(
        item: OrderItemDTO,
        currency_symbol: str = "$",
        split: LineTotalDTO | None = None
    ) -> str | None:
        """
        Promotion note for one invoice line.

        Pass `split` when the line was already re-derived with reprice_order_item().

        Examples:
            "Buy 2 for $140.00 + 1 × $79.00"
            "Sale price $80.00 (was $100.00)"
        """
        if split is None:
            split = InvoiceFormatterService.reprice_order_item(item)
        if split.units_at_pair_rate:
            note = f"Buy 2 for {format_money(item.pair_price, currency_symbol)}"
            if split.units_at_single_rate:
                note += f" + {split.units_at_single_rate} × {format_money(item.price, currency_symbol)}"
            return note
        if to_money(item.price) < to_money(item.original_price):
            return (f"Sale price {format_money(item.price, currency_symbol)} "
                    f"(was {format_money(item.original_price, currency_symbol)})")
        return None

    @staticmethod
    def format_invoice(order: OrderDTO, currency_symbol: str | None = None) -> str:
        symbol = currency_symbol or order.currency.symbol
        lines = [
            f"INVOICE {order.order_number}",
        ]
        if order.created_at:
            lines.append(f"Date: {order.created_at:%Y-%m-%d}")
        lines.append("")

        for item in order.items:
            split = InvoiceFormatterService.reprice_order_item(item)
            label = item.name if not item.color else f"{item.name} ({item.color})"
            lines.append(f"{item.quantity} × {label}  {format_money(split.line_total, symbol)}")
            note = InvoiceFormatterService.format_promotion_note(item, symbol, split)
            if note:
                lines.append(f"    {note}")

        lines.append("")
        lines.append(f"Subtotal: {format_money(order.subtotal, symbol)}")
        if order.total_savings > 0:
            lines.append(f"You saved: {format_money(order.total_savings, symbol)}")
        if order.shipping_cost > 0:
            lines.append(f"Shipping: {format_money(order.shipping_cost, symbol)}")
        else:
            lines.append("Shipping: Free")
        lines.append(f"Total ({order.currency.value}): {format_money(order.total, symbol)}")
        return "\n".join(lines)
