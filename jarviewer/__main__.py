"""Module entrypoint for ``python -m jarviewer``.

All argument parsing and archive loading happen in ``jarviewer.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
