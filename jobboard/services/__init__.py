"""
Services - Gemini parser client, profile store and resume ingestion pipeline.
"""
