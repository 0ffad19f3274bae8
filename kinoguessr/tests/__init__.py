"""Tests for KinoGuessr."""
