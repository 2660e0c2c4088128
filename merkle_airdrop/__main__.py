import sys

from merkle_airdrop.cli import main

sys.exit(main())
