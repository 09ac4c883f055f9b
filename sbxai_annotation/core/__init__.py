"""
Core editor logic, independent of any UI framework.
"""
