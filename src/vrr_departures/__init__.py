"""Upcoming departures for a VRR station, refreshed continuously."""
