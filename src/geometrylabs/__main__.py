"""Run with: python -m geometrylabs"""
import sys

from geometrylabs.app.main import main

if __name__ == "__main__":
    sys.exit(main())
