"""Yamato TA-Q-BIN calculator version, stamped on every calculated row."""

VERSION = "2025.12.1"
