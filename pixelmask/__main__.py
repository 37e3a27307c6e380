import sys

from .cli.run_pipeline import main

sys.exit(main())
