"""Allow ``python -m crosschain_positions``."""
from .cli import main

if __name__ == "__main__":
    main()
