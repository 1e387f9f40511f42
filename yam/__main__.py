"""Allow running yam with ``python -m yam``."""

from yam.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
