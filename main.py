# main.py

import sys

from aadhaar_ocr.cli import main

if __name__ == "__main__":
    sys.exit(main())
