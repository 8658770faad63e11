"""Module entrypoint for ``python -m changetree``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing happens in ``changetree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
