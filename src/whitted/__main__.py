import sys
from whitted.main import main

sys.exit(main())
