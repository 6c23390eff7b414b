import sys

from vote_counter.cli import main

sys.exit(main())
