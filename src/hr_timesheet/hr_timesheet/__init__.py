"""HR timesheet package.

Organized by feature modules (users, attendance, shifts, geofence, payroll)
with a thin Flask controller layer over service/repository layers. The
attendance-to-salary derivation (geofence check, shift duration, daily
pairing, monthly hours) lives in pure modules with no I/O.
"""
