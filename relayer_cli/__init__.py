"""
Relayer CLI

Command-line interface for dispatching sessions and sending relays.

Usage:
    python -m relayer_cli session --chain 0021 --app-pub-key <hex>
    python -m relayer_cli relay --chain 0021 --data '{"jsonrpc":"2.0",...}' --aat aat.json
"""

__version__ = "0.1.0"
