"""
Application layer for the Summit API.

This package contains:
- ports/: Repository interfaces (what the domain needs from storage)
- use_cases/: Operations that mutate ProgressState and persist the result
- exceptions.py: Application errors
"""
