"""Main function for icumotion."""

from icumotion.core import cli


def run_main() -> None:
    """Main entry point to icumotion."""
    cli.app()


if __name__ == "__main__":
    cli.app()
