"""Tests for vrr_departures."""
