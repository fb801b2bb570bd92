"""Geofenced attendance package.

Organized by feature modules (sessions, attendance, geometry, location, ...)
with a thin Flask controller layer over service/repository layers.
"""
