"""Test suite for MiscIncome Sync."""
