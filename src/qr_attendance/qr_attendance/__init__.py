"""QR Attendance client package.

Organized by feature modules (session, scanning, location, gateway, attendance)
around a single workflow state machine that drives a passive display surface.
"""
