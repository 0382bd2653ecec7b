"""Timesheet & Travel Expense System package.

This package is organized by feature modules (allowances, expenses, timesheets, users)
with a thin Flask controller layer over service/repository layers.
"""
