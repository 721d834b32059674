"""
HTTP layer for schedule shift sync.
"""
