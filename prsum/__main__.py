"""Module entrypoint for `python -m prsum`.

This module enables running prsum as a Python module using `python -m prsum`.
It forwards to the same main() function as the console script.

Note:
    Prefer using the installed console script `prsum` when available.
"""

from .cli import main

if __name__ == "__main__":
    main()
