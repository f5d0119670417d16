"""RFID Attendance package.

This package is organized by feature modules (employees, cards, attendance,
payroll, reports, ...) on top of an asynchronous key-value storage layer,
with a thin Flask controller layer over the service/repository layers.
"""
