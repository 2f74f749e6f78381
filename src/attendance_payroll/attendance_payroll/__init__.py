"""Attendance & payroll package.

This package is organized by feature modules (attendance, payroll, users, ...)
with a thin Flask controller layer and service/repository layers. Presence
events are validated against location and sequencing rules before they are
stored; payroll figures are recomputed from the stored history on demand.
"""
