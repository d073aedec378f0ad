"""Allow ``python -m xsltsmith``."""

from xsltsmith.ui.cli import main


if __name__ == "__main__":
    main()
