"""
Core processing modules for schedule shift sync.

This package contains:
- config: Application configuration and settings
- exceptions: Custom exception classes
- exporters: Excel export of reconciled shifts
- logger: Logging configuration
- normalize: Clock time, month and title normalization
- parsing: OCR transcript line classifier and state machine
- reconcile: Multi-screenshot deduplication and ordering
- schema: Pydantic models for shift records
"""
