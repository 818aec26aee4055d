"""menu driven console client for a pizza ordering database"""

__version__ = "0.1.0"
