"""Module entrypoint for ``python -m mdpager``.

All argument parsing and runtime setup happen in ``mdpager.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
