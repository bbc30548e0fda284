"""Operator scripts: seed data and the payroll command line."""
