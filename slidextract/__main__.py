import sys

from slidextract.adapters.inbound.cli import main

sys.exit(main())
