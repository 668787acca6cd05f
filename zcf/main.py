import sys

from zcf.core.application import run as cli_run

__all__ = ["run"]


def run():
    """Console entry point."""
    sys.exit(cli_run())


if __name__ == "__main__":
    run()
