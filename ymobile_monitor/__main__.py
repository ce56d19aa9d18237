"""
Main entry point for the ymobile_monitor package.

Allows running the monitor as: python -m ymobile_monitor
"""

from ymobile_monitor.cli import main

if __name__ == "__main__":
    main()
