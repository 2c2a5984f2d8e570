# run_fpsr.py
import sys

from fpsr_engine.cli import main

if __name__ == "__main__":
    sys.exit(main())
