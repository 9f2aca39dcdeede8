#!/usr/bin/env python3
"""Count Clock entry point.

Run with:
    python main.py
    python -m countclock
"""

from countclock.__main__ import main


if __name__ == "__main__":
    main()
