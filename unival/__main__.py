import sys

from unival.cli import main

sys.exit(main())
