#!/usr/bin/env python3
"""Entry point for the Laptop SAW application."""

import sys

if __name__ == "__main__":
    from laptop_saw.main import main
    sys.exit(main())
