"""Core services — discovery, classification and the placeholder swap.

Everything here reads the filesystem directly and keeps no state
between calls.
"""
