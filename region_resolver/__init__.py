"""
Region Resolver - administrative region lookup for blood request locations.

This package resolves coordinates and free-text address hints onto the
division, district and upazila hierarchy, and publishes chat and
notification events to per-user realtime channels.
"""

__version__ = "1.0.0"
__author__ = "Data Analytics Team"
