"""Domain layer for gymledger application."""
