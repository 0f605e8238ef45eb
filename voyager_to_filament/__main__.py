import sys

from voyager_to_filament.cli import main

sys.exit(main())
