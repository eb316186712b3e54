"""School Attendance package.

This package is organized by feature modules (attendance, roster, reports, ...)
with a thin Flask controller layer, a report job entry point and
service/repository layers behind them.
"""
