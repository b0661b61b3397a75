"""
Change which locale occupies the system default language identity.
"""
__version__ = "1.0.0"
