"""Entry point for rustm CLI."""

from rustm.cli import app


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
