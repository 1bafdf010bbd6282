"""
Station Locator API
Finds nearby charger and return kiosks
"""

__version__ = "1.0.0"
