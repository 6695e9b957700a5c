"""
Utilities - resume text extraction and logging.
"""
