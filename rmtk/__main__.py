"""Module entrypoint for ``python -m rmtk``.

All argument parsing and runtime setup happen in ``rmtk.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
