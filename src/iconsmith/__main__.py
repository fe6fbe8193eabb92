"""Allow ``python -m iconsmith``."""

from iconsmith.ui.cli import main


if __name__ == "__main__":
    main()
