"""Wallet routes"""
