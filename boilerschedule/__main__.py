"""
Package entry point.

Allows running the application via:

    python -m boilerschedule

This simply forwards execution to boilerschedule.cli.main().
"""

from boilerschedule.cli import main

if __name__ == "__main__":
    main()
