"""`python -m api` で CLI を実行する。"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
