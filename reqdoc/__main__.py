"""Allow running as `python -m reqdoc`."""

from .cli import main

if __name__ == "__main__":
    main()
