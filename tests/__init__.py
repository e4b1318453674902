"""
Project-level test suite.

Test Organization:
- integration/ - end-to-end API flows across endpoints
- App-specific tests remain in their app directories (e.g., submissions/tests.py)
"""
