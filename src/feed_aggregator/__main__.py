import sys

from feed_aggregator.main import main

sys.exit(main())
