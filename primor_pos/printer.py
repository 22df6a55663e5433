"""Kitchen-ticket printing on a USB ESC/POS thermal printer."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from primor_pos.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from primor_pos.models import FulfillmentType, Order

logger = logging.getLogger(__name__)

# Extra vertical headroom for full-size lines to avoid descender clipping on thermal output.
_MAIN_LINE_EXTRA_PX = 20
_HEADER_RIGHT_GUTTER_PX = 8
_COMPLEMENT_INDENT = "    "
_CUT_MARK = ".."
_FONT_OVERRIDE_ENV = "PRIMOR_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)

FULFILLMENT_LABELS: dict[FulfillmentType, str] = {
    FulfillmentType.DINE_IN: "MESA",
    FulfillmentType.PICKUP: "RETIRADA",
    FulfillmentType.DELIVERY: "ENTREGA",
}


def ticket_lines(order: Order) -> list[str]:
    """Item and complement lines for the kitchen, in order-item order."""
    lines: list[str] = []
    for item in order.items:
        lines.append(f"{item.quantity}x {item.name}")
        for group in item.selected_complements:
            for complement in group.items:
                lines.append(f"{_COMPLEMENT_INDENT}+ {complement.name}")
    return lines


def font_candidates() -> list[str]:
    """Env override, then the configured font, then common Linux fonts; no duplicates."""
    override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    ordered = (override, PRINTER_FONT_PATH, *_LINUX_FONT_FALLBACKS)
    return list(dict.fromkeys(path for path in ordered if path))


def resolve_printer_font_path() -> str:
    candidates = font_candidates()
    for candidate in candidates:
        if Path(candidate).is_file():
            return candidate
    raise RuntimeError(
        f"No usable printer font for kitchen tickets; set {_FONT_OVERRIDE_ENV}. Tried: {', '.join(candidates)}"
    )


def load_fonts() -> tuple[object, object]:
    """Return (line font, header font)."""
    from PIL import ImageFont

    font_path = resolve_printer_font_path()
    return (
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE),
        ImageFont.truetype(font_path, max(20, PRINTER_FONT_SIZE - 8)),
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable and a font resolves."""
    try:
        from escpos.printer import Usb  # noqa: F401

        load_fonts()
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def truncate_to_width(text: str, font: object, max_width_px: int) -> str:
    """Longest prefix of ``text`` that fits, marked with a trailing ``..`` when cut."""
    if font.getlength(text) <= max_width_px:
        return text
    low, high = 0, len(text)
    while low < high:
        mid = (low + high + 1) // 2
        if font.getlength(text[:mid] + _CUT_MARK) <= max_width_px:
            low = mid
        else:
            high = mid - 1
    return text[:low] + _CUT_MARK


def _render_line(text: str, font: object, tail_px: int = 0) -> object:
    """One ticket line; ``tail_px`` adds blank paper below it."""
    from PIL import Image, ImageDraw

    scratch = Image.new("1", (1, 1), color=1)
    bbox = ImageDraw.Draw(scratch).textbbox((0, 0), text or " ", font=font)
    text_height = bbox[3] - bbox[1]
    line_height = text_height + _MAIN_LINE_EXTRA_PX

    img = Image.new("1", (PRINTER_WIDTH_PX, line_height + tail_px), color=1)
    draw = ImageDraw.Draw(img)
    safe_text = truncate_to_width(text, font, PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX)
    # Offset by bbox top so descenders (g, y, p, etc.) are not clipped.
    y = (line_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), safe_text, font=font, fill=0)
    return img


def _render_header(order: Order, font: object) -> object:
    """Order number right-aligned, fulfillment and customer on the left."""
    from PIL import Image, ImageDraw

    number_text = f"#{order.order_number}"
    left_text = f"{FULFILLMENT_LABELS[order.fulfillment]} {order.customer_name}"

    scratch = Image.new("1", (1, 1), color=1)
    measure_draw = ImageDraw.Draw(scratch)
    number_bbox = measure_draw.textbbox((0, 0), number_text, font=font)
    number_width = number_bbox[2] - number_bbox[0]
    number_height = number_bbox[3] - number_bbox[1]
    top_padding = 4
    bottom_padding = 12
    canvas_height = max(26, number_height + top_padding + bottom_padding)

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    number_x = PRINTER_WIDTH_PX - _HEADER_RIGHT_GUTTER_PX - number_width - number_bbox[0]
    draw.text((number_x, top_padding - number_bbox[1]), number_text, font=font, fill=0)

    left_room = max(40, number_x - PRINTER_LEFT_INDENT_PX - _HEADER_RIGHT_GUTTER_PX)
    safe_left = truncate_to_width(left_text, font, left_room)
    draw.text((PRINTER_LEFT_INDENT_PX, top_padding - number_bbox[1]), safe_left, font=font, fill=0)
    return img


def _open_printer() -> object:
    try:
        from escpos.printer import Usb
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc
    return Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)


def print_order_ticket(order: Order, printer: object | None = None) -> None:
    """Print the kitchen ticket for ``order`` and cut the paper."""
    lines = ticket_lines(order)
    if not lines:
        return

    device = printer if printer is not None else _open_printer()
    font, header_font = load_fonts()

    # Single-item tickets get tear-off paper below the last line.
    tail_px = PRINTER_TAIL_SPACER_PX if len(order.items) == 1 else 0

    device.image(_render_header(order, header_font))
    for idx, line in enumerate(lines):
        device.image(_render_line(line, font, tail_px if idx == len(lines) - 1 else 0))
    device.cut()
    logger.info("ticket_printed number=%s lines=%d", order.order_number, len(lines))
