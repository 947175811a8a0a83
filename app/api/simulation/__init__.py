"""Test simulation routes"""
