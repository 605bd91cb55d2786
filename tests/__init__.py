"""
Test suite for the TidyTask backend.

This package contains all test types:
- Unit tests
- Integration tests
- API endpoint tests
- Database migration tests
- Regression tests
- Snapshot tests
- Security tests
- Property-based tests

Load tests live in performance/locustfile.py and are run with Locust, not pytest.
"""
