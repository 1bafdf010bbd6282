"""
Data Models
"""
