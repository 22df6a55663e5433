"""Runtime configuration defaults for session storage, logging and printing."""

from __future__ import annotations

import os

DB_PATH = os.environ.get("PRIMOR_DB_PATH", "data/primor.db")
LOG_PATH = os.environ.get("PRIMOR_LOG_PATH", "/tmp/primor-debug.log")
LOG_LEVEL = os.environ.get("PRIMOR_LOG_LEVEL", "INFO")

SESSION_KEY = "primor_user"

CURRENCY_SYMBOL = "R$"

# Kitchen card ages, in minutes.
URGENCY_WARN_MINUTES = 10
URGENCY_CRITICAL_MINUTES = 15

PRINTER_ENABLED = os.environ.get("PRIMOR_PRINTER_ENABLED", "1") not in {"0", "false", "no"}
PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 40
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70
