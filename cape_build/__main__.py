"""Entry point for ``python -m cape_build``."""

from cape_build.cli import main

if __name__ == "__main__":
    main()
