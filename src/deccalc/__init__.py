"""
DecCalc - arbitrary-precision calculator tools served over MCP.
"""

__version__ = "0.1.0"
