import sys

from SCTAPE.cli import main

sys.exit(main())
