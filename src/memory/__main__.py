"""
Entry point for running as module: python -m src.memory chat
"""

# Load environment variables BEFORE importing modules that read them
from dotenv import load_dotenv
load_dotenv()

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
