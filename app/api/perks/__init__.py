"""Perk and redemption routes"""
