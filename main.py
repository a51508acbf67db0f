#!/usr/bin/env python3
"""
Main Entry Point

Reflinks - fills in bare references in wikitext.
"""

import sys

from reflinks.main import main

if __name__ == "__main__":
    sys.exit(main())
