#!/usr/bin/env python3
"""Start the Overtimer desktop app.

Run with:
    python main.py
    python -m overtimer

The history server has its own entry point: python -m overtimer.api
"""

from overtimer.__main__ import main


if __name__ == "__main__":
    main()
