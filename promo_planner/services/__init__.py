"""Conversion services: header analysis, extraction and run orchestration."""
