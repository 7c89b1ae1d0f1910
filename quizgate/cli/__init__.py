"""
Command-line front end.
"""
