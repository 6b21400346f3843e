import sys

from netcascade.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
