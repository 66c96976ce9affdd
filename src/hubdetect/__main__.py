import sys

from hubdetect.cli import main

sys.exit(main())
