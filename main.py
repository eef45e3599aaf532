#!/usr/bin/env python3
"""
Mailbox Crawler - Entry Point

Crawls Anytime Mailbox US locations and enriches their addresses with
Smarty CMRA / RDI data.

Usage:
    CREDENTIALS=ID1=SECRET1,ID2=SECRET2 python main.py [options]

For more options:
    python main.py --help
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from mailbox_crawler.crawler import main

if __name__ == "__main__":
    main()
