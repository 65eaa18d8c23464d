"""
MoodLog Infrastructure Layer

External integrations: database, LLM providers, metrics and error
tracking. Providers implement abstract interfaces so tests can swap
them out.
"""
