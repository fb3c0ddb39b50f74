import sys

from searchinspector.app.main import main

if __name__ == "__main__":
    sys.exit(main())
