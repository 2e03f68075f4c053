"""
Core module - types, exceptions and the grid margin engine
"""
