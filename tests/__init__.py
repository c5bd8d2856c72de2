"""
Test suite for tradewire

Contains:
- tests/unit/          : Unit tests for models, contracts, codecs, CLI
"""
