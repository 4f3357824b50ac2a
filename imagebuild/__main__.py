# imagebuild\__main__.py
import sys

from imagebuild.cli import main

sys.exit(main())
