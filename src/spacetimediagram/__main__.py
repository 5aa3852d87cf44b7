"""Allow ``python -m spacetimediagram``."""
from spacetimediagram.main import main

if __name__ == "__main__":
    main()
