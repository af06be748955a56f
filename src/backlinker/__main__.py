import sys

from backlinker.cli import main

sys.exit(main())
