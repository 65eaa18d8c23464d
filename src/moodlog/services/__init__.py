"""Application services: prompt building, analysis and session orchestration."""
