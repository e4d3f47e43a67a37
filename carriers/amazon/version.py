"""Amazon Shipping calculator version, stamped on every calculated row."""

VERSION = "2026.01.1"
