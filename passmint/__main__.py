import sys

from passmint.cli import main

sys.exit(main())
