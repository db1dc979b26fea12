import sys

from wcecabinfo import main

sys.exit(main())
