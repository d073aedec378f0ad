"""Adapters wrapping external XSLT processors."""
