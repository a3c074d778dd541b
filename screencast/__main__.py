import sys

from screencast.cli import main

sys.exit(main())
