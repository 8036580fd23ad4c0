"""
Fintrack - Personal Finance Tracker

A FastAPI backend that stores income and expense transactions and proxies
AI-assisted summaries, bill scans, chat and budget recommendations, plus an
async client that keeps a session-scoped mirror of a user's transactions.
"""

__version__ = "0.1.0"
