"""
Core domain models, wire contracts, and codecs.

This module contains the building blocks that are independent of
transport and storage (no I/O, no networking).
"""
