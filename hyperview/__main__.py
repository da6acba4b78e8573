import sys

from hyperview.viewer import main

sys.exit(main())
