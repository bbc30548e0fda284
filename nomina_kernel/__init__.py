"""
Nómina Kernel

Pure payroll core for a semi-monthly (quincena) payroll system:
- Deterministic period identification in a fixed civil time zone
- Row-level access scoping by role and branch assignment
- Typed errors and structured logging
- A store abstraction over in-memory or SQLAlchemy-backed snapshots
"""

__version__ = "0.1.0"
