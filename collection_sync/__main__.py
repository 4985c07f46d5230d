import sys

from collection_sync.cli import main

sys.exit(main())
