"""
Benchwarmer

Fantasy football lineup hindsight: compares the lineup a manager actually started
each week against the best lineup their roster allowed, and explains the gap as a
short list of lineup swaps.
"""

__version__ = "1.0.0"
__author__ = "Benchwarmer Team"
__description__ = "Season lineup hindsight reports for fantasy football"
