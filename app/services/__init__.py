"""
Business Services
"""
