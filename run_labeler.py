#!/usr/bin/env python3
"""
Path Labeler runner

Entry script for the GitHub Action step:

    python run_labeler.py [--sync-labels] [--dry-run]
"""

import sys

from path_labeler.main import main

if __name__ == '__main__':
    sys.exit(main())
