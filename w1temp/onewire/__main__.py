"""One-wire temperature logger entrypoint.

Reads every configured DS18B20 probe once, then writes the samples to
each configured SQLite store.

Usage: python -m w1temp.onewire
"""

import sys

from w1temp.onewire.run import main

if __name__ == "__main__":
    sys.exit(main())
