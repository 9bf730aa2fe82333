"""Allow ``python -m config_composer``."""
import sys

from config_composer.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
