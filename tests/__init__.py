"""
Test suite for the Smart Fridge advisor.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_response_parser.py -v
"""
