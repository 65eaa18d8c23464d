"""
MoodLog - AI-Powered Wellness Session Summaries

This package provides the backend services for MoodLog: conversations
between a user and a supportive chat agent are analyzed by an LLM and
persisted as structured, bounded session summaries with mood analytics.

PRIVACY: Conversation transcripts are sensitive. They are stored for audit
but never echoed back in API responses or error payloads.
"""

__version__ = "0.1.0"
__author__ = "MoodLog Engineering Team"
