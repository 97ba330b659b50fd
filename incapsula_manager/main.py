"""Incapsula Manager - Main entry point.

Manage Incapsula sites and policy asset associations.
"""
from incapsula_manager.adapters.inbound.cli_adapter import main as cli_main


def main() -> None:
    """Main entry point - delegates to CLI adapter."""
    cli_main()


if __name__ == "__main__":
    main()
