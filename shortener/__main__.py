import sys

from shortener.main import main

sys.exit(main())
