# semrange/__main__.py
import sys

from semrange.cli import main

sys.exit(main())
