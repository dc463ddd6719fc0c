"""Module entrypoint for ``python -m notemd``.

All argument parsing and runtime setup happen in ``notemd.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
