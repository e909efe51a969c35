import sys

from typewriter.app import main

sys.exit(main())
