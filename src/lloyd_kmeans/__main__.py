import sys

from lloyd_kmeans.cli import main

sys.exit(main())
