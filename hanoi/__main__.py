import sys

from hanoi.main import main

sys.exit(main())
