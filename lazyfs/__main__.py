"""Module entrypoint for ``python -m lazyfs``."""

from .cli import main


if __name__ == "__main__":
    main()
