"""
Security module - Constants shared by the hashing core.
"""
