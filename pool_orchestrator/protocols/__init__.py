"""
Protocol contract interfaces
"""
