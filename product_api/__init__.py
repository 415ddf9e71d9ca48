"""
Product API - product catalogue service with bearer-token authorization
"""

__version__ = "1.0.0"
