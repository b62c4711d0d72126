import sys

from md_term.cli import main

if __name__ == '__main__':
    sys.exit(main())
