"""Attendance Console package.

Staff attendance administration organized by feature modules (employees,
attendance, roster, leave, ...) with a thin Flask controller layer over
service/repository layers.
"""
