"""Allow ``python -m flash_stats``."""

from flash_stats.cli import main

if __name__ == "__main__":
    main()
