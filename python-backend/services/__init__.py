"""
Service layer for the Print Crop service
"""
