import sys

from geoupload.cli import main

sys.exit(main())
