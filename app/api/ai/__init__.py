"""AI proxy routes"""
