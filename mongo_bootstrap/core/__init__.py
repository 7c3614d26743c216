"""
Core utilities - error taxonomy shared by the bootstrap runner and CLI.
"""
