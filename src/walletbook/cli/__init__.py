"""Command-line interface for walletbook."""
