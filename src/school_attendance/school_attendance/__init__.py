"""School Attendance package.

This package is organized by feature modules (people, attendance, reports, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
