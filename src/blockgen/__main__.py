import sys

from blockgen.cli import main

sys.exit(main())
