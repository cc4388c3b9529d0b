"""
Core Package

Immutable data models shared by the slicing pipeline.
"""
