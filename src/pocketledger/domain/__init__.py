"""Domain layer for pocketledger application."""
