"""hashup -- hash, verify and migrate password hashes across CHFs"""

__version__ = "1.0.0"
