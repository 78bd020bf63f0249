import sys

from vidnotes.cli import main

sys.exit(main())
