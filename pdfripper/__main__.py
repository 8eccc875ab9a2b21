import sys

from pdfripper.cli import main

sys.exit(main())
