"""
CLI command modules.
"""

from relayer_cli.commands import relay, session

__all__ = ["relay", "session"]
