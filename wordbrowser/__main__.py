import sys

from wordbrowser.cli import main

sys.exit(main())
