"""Partner dashboard routes"""
