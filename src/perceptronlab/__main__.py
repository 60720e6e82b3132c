"""
Run with: python -m perceptronlab
"""
import sys

from perceptronlab.main import main

if __name__ == "__main__":
    sys.exit(main())
