#!/usr/bin/env python
"""
minorephem - Minor Planet Ephemeris Calculator

Entry point for running the ephemeris CLI from a source checkout.

Version: 1.0.0
"""

import sys

# Version information for reproducibility
__version__ = "1.0.0"


def main():
    """Main entry point for minorephem."""
    if '--version' in sys.argv[1:]:
        print(f"minorephem {__version__}")
        return

    try:
        from minorephem.cli.main import main as cli_main
        sys.exit(cli_main(sys.argv[1:]))
    except ImportError as e:
        print(f"ERROR: Failed to import required module: {e}", file=sys.stderr)
        print("Ensure all dependencies are installed: pip install -e .", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)  # Standard exit code for SIGINT

if __name__ == "__main__":
    main()
