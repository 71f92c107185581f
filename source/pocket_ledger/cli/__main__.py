"""Main entry point for the CLI application."""

from pocket_ledger.cli import create_cli

cli = create_cli()


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
