"""
Business modules of the nómina core.

Each sub-package owns one area (employees, payroll, bonuses, attendance,
vacations, users, reports) and exposes a service facade over the kernel
store.
"""
