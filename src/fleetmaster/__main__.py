import sys

from fleetmaster.cli import main

sys.exit(main())
