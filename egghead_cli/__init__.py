"""
egghead-cli: download egghead.io courses from the command line.
"""

__version__ = "1.0.0"
