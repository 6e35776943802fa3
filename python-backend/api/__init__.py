"""
HTTP layer for the Print Crop service
"""
