"""
Command line tools for the MAI Gateway.
"""
