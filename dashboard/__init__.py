"""
HTTP API for resume extraction and insights
"""
