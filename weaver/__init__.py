"""
Insight Weaver - feed curation, summarization and report export service.
"""

__version__ = "1.0.0"
