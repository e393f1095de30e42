import sys

from quicky_setup.cli import main

sys.exit(main())
