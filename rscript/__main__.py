import sys

from rscript.cli import main

sys.exit(main())
