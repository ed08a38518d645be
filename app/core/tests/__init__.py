"""Tests for core infrastructure: error mapping and health checks."""
