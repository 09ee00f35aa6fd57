"""
Learning Progress Test Suite

Test Structure:
    tests/
    ├── conftest.py                 # Shared fixtures and configuration
    └── unit/                       # Unit tests (isolated, no external services)
        ├── test_date_range.py      # Calendar day keys
        ├── test_merger.py          # Per-day deduplication
        ├── test_normalizer.py      # Percent normalization
        ├── test_rolling.py         # Rolling window averages
        ├── test_engine.py          # Full aggregation pass
        ├── test_stats_client.py    # Stats source client (mock transport)
        └── test_progress_api.py    # API routes

Running Tests:
    # Run all tests
    pytest backend/tests/ -v

    # Run with coverage
    pytest backend/tests/ --cov=progress_dashboard --cov-report=html
"""
