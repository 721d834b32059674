"""
Service layer for business logic.

This package contains the service that orchestrates one schedule import
session: OCR of every screenshot, transcript parsing and reconciliation.
"""
