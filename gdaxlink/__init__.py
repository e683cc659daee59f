"""
gdaxlink: GDAX spot exchange driver.
"""

__version__ = "0.1.0"
