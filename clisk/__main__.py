import sys

from clisk.cli import main

sys.exit(main())
