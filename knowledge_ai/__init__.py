"""
knowledge-ai — multi-provider AI invocation layer for knowledge cards.
"""
__version__ = "0.1.0"
