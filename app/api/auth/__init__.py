"""Authentication routes"""
