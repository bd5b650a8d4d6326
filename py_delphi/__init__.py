"""
Procedural hex board generation for the Oracle of Delphi map.
"""

__version__ = "0.1.0"
