import sys

from domviz.cli import main

# recursion limit increase for deep HTML trees
sys.setrecursionlimit(5000)


if __name__ == "__main__":
    sys.exit(main())
