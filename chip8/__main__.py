import sys

from chip8.cli import main

sys.exit(main())
