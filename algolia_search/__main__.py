"""
Main Entry Point for the Algolia Search Client

Runs the command line interface when the package is executed as a module.

Example Usage:
    $ python -m algolia_search indexes
    $ python -m algolia_search search contacts "jimmie"
    $ python -m algolia_search secured-key PRIVATE_KEY "public,user42"
"""

import sys
from typing import Optional, Sequence

from .cli import cli


def main(args: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments.
            Defaults to sys.argv[1:].

    Returns:
        Exit code.
    """
    cli(args=args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
