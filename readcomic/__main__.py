import sys

from readcomic.core.main import console_main

sys.exit(console_main())
