import sys

from para_analyzer.cli import main

sys.exit(main())
