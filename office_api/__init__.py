"""Office Listings API: coworking office marketplace backend"""

__version__ = "1.0.0"
