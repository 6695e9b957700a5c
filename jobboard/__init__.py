"""
Job Board Backend
REST backend for a job board with AI-assisted resume ingestion.

Architecture:
- PostgreSQL: users, jobs, applications, profiles
- Local disk: uploaded resume files (uploads/resumes)
- Gemini completions API: resume parsing only (text -> six profile fields)
"""

__version__ = "1.0.0"
