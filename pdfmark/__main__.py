import sys

from pdfmark.cli import main

if __name__ == "__main__":
    sys.exit(main())
