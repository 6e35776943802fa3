"""
Core modules for the Print Crop service
"""
