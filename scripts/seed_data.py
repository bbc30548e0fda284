#!/usr/bin/env python3
"""
Seed data for demos, the command line and tests.

Three branches, six employees (one archived), the July 2024 incidents,
four bonus templates, four vacation requests, the three demo users and a
reproducible month of attendance punches.

Usage:
    from scripts.seed_data import build_seed_store
    store = build_seed_store()
"""

import random
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from nomina_kernel.domain.access import Role, User
from nomina_kernel.domain.periods import CIVIL_TZ
from nomina_kernel.store import PayrollStore
from nomina_modules.attendance.models import AttendanceDayLog
from nomina_modules.bonuses.models import BonusCalculationType, BonusTemplate
from nomina_modules.employees.models import Branch, Employee, EmployeeStatus
from nomina_modules.payroll.models import Incident, IncidentType
from nomina_modules.stores import build_memory_store
from nomina_modules.vacations.models import VacationRequest, VacationRequestStatus

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
SEED_REFERENCE = datetime(2024, 7, 20, 12, 0, tzinfo=CIVIL_TZ)
ATTENDANCE_EMPLOYEE_IDS = (2, 3, 5)
ATTENDANCE_RANDOM_SEED = 2024


BRANCHES = (
    Branch(id=1, name="Corporativo CDMX", code="CDMX-CORP"),
    Branch(id=2, name="Sucursal Monterrey", code="MTY-NORTE"),
    Branch(id=3, name="Sucursal Guadalajara", code="GDL-OCC"),
)


def _employee(id, name, email, rfc, curp, nss, branch_id, position, rank,
              gross, hired, status=EmployeeStatus.ACTIVE, avatar=None):
    return Employee(
        id=id,
        external_id=f"EMP-{id:03d}",
        name=name,
        email=email,
        rfc=rfc,
        curp=curp,
        nss=nss,
        clabe=f"0121800{nss}",
        branch_id=branch_id,
        position=position,
        rank=rank,
        gross_salary=Decimal(gross),
        hire_date=date.fromisoformat(hired),
        status=status,
        avatar_url=f"https://picsum.photos/seed/{avatar}/200" if avatar else None,
    )


EMPLOYEES = (
    _employee(1, "Ana García Pérez", "ana.garcia@example.com", "GAPN850101XXX",
              "GAPN850101HDFXXX01", "12345678901", 1, "Gerente de Nómina",
              "Gerencia", "55000", "2020-03-15", avatar="woman1"),
    _employee(2, "Carlos Rodríguez López", "carlos.rodriguez@example.com",
              "ROLC900202YYY", "ROLC900202HMCYYY02", "23456789012", 2,
              "Desarrollador Senior", "Senior", "48000", "2021-07-20", avatar="man1"),
    _employee(3, "Sofía Martínez Hernández", "sofia.martinez@example.com",
              "MAHS950303ZZZ", "MAHS950303MJCZZZ03", "34567890123", 1,
              "Analista de RRHH", "Analista", "28000", "2022-01-10", avatar="woman2"),
    _employee(4, "Luis Hernández García", "luis.hernandez@example.com",
              "HEGL880404AAA", "HEGL880404HDFNRA04", "45678901234", 3,
              "Gerente de Sucursal", "Gerencia", "52000", "2019-11-05", avatar="man2"),
    _employee(5, "Elena Gómez Morales", "elena.gomez@example.com", "GOME920505BBB",
              "GOME920505MMCNLA05", "56789012345", 2, "Asistente Administrativo",
              "Asistente", "22000", "2023-02-28", avatar="woman3"),
    _employee(6, "Miguel Torres Castillo", "miguel.torres@example.com",
              "TOCM890606CCC", "TOCM890606HDFTRA06", "67890123456", 1,
              "Diseñador UX/UI", "Senior", "45000", "2021-09-01",
              status=EmployeeStatus.ARCHIVED, avatar="man3"),
)

INCIDENTS = (
    Incident(id=1, employee_id=2, period="2024-07-Q2", type=IncidentType.BONUS,
             amount=Decimal("2500"), comment="Bono por desempeño trimestral"),
    Incident(id=2, employee_id=3, period="2024-07-Q2", type=IncidentType.OVERTIME,
             amount=Decimal("850"), comment="5 horas extra por cierre de mes"),
    Incident(id=3, employee_id=5, period="2024-07-Q2", type=IncidentType.ADVANCE,
             amount=Decimal("-1500"), comment="Adelanto de nómina solicitado"),
    Incident(id=4, employee_id=2, period="2024-07-Q1", type=IncidentType.DEDUCTION,
             amount=Decimal("-500"), comment="Descuento por equipo dañado"),
)

BONUS_TEMPLATES = (
    BonusTemplate(id=1, name="Bono de Desempeño Trimestral",
                  calculation_type=BonusCalculationType.FIXED, value=Decimal("2500"),
                  description="Bono fijo por cumplimiento de metas trimestrales."),
    BonusTemplate(id=2, name="Bono de Resultados de Ventas",
                  calculation_type=BonusCalculationType.PERCENTAGE, value=Decimal("5"),
                  description="5% del salario bruto mensual por alcanzar la cuota de ventas."),
    BonusTemplate(id=3, name="Bono de Puntualidad",
                  calculation_type=BonusCalculationType.FIXED, value=Decimal("500"),
                  description="Bono fijo por asistencia perfecta durante el periodo."),
    BonusTemplate(id=4, name="Comisión Especial",
                  calculation_type=BonusCalculationType.FIXED, value=Decimal("1000"),
                  description="Comisión por proyecto o venta especial."),
)


def _utc(text: str) -> datetime:
    return datetime.fromisoformat(text).replace(tzinfo=timezone.utc)


VACATION_REQUESTS = (
    VacationRequest(id=1, employee_id=2, start_date=date(2024, 4, 10),
                    end_date=date(2024, 4, 12), days_requested=3,
                    status=VacationRequestStatus.APPROVED,
                    requested_at=_utc("2024-03-15T09:00:00"),
                    reviewed_by="Admin Nómina", reviewed_at=_utc("2024-03-16T11:00:00")),
    VacationRequest(id=2, employee_id=3, start_date=date(2023, 12, 22),
                    end_date=date(2023, 12, 29), days_requested=5,
                    status=VacationRequestStatus.APPROVED,
                    requested_at=_utc("2023-11-20T14:30:00"),
                    reviewed_by="Admin Nómina", reviewed_at=_utc("2023-11-21T10:00:00")),
    VacationRequest(id=3, employee_id=2, start_date=date(2024, 8, 19),
                    end_date=date(2024, 8, 23), days_requested=5,
                    status=VacationRequestStatus.PENDING,
                    requested_at=_utc("2024-07-25T16:00:00")),
    VacationRequest(id=4, employee_id=5, start_date=date(2024, 9, 2),
                    end_date=date(2024, 9, 6), days_requested=5,
                    status=VacationRequestStatus.PENDING,
                    requested_at=_utc("2024-07-28T10:00:00")),
)

ADMIN = User(id=101, name="Admin Nómina", email="admin@nomina.pro",
             role=Role.SUPER_ADMIN,
             avatar_url="https://picsum.photos/seed/admin/200")
MANAGER = User(id=102, name="Gerente Sucursal", email="manager@nomina.pro",
               role=Role.BRANCH_MANAGER, assigned_branch_ids=frozenset({2, 3}),
               avatar_url="https://picsum.photos/seed/manager/200")
EMPLOYEE_USER = User(id=103, name="Sofía Martínez", email="sofia.martinez@example.com",
                     role=Role.EMPLOYEE, employee_id=3,
                     avatar_url="https://picsum.photos/seed/woman2/200")

USERS = {"admin": ADMIN, "manager": MANAGER, "employee": EMPLOYEE_USER}


# ---------------------------------------------------------------------------
# Attendance
# ---------------------------------------------------------------------------


def generate_attendance(
    reference: date,
    employee_ids=ATTENDANCE_EMPLOYEE_IDS,
    seed: int = ATTENDANCE_RANDOM_SEED,
) -> list[AttendanceDayLog]:
    """
    Punches for every weekday of ``reference``'s month before ``reference``.

    Roughly four days in five are worked (clock-in 08:45-09:15, clock-out
    17:45-18:15 civil time); the rest are left empty.  A fixed seed keeps
    the output stable between runs.
    """
    rng = random.Random(seed)
    logs = []
    for employee_id in employee_ids:
        for day in range(1, reference.day):
            work_date = reference.replace(day=day)
            if work_date.weekday() >= 5:
                continue
            if rng.random() >= 0.8:
                continue
            start = datetime.combine(work_date, time(8, 45), tzinfo=CIVIL_TZ)
            clock_in = start + timedelta(minutes=rng.randint(0, 30))
            clock_out = start + timedelta(hours=9, minutes=rng.randint(0, 30))
            logs.append(AttendanceDayLog(
                id=len(logs) + 1,
                employee_id=employee_id,
                work_date=work_date,
                clock_in=clock_in,
                clock_out=clock_out,
            ))
    return logs


def build_seed_store(
    reference: datetime = SEED_REFERENCE,
    with_attendance: bool = True,
) -> PayrollStore:
    """A fresh in-memory store loaded with the seed records."""
    attendance = (
        generate_attendance(reference.astimezone(CIVIL_TZ).date())
        if with_attendance else ()
    )
    return build_memory_store(
        branches=BRANCHES,
        employees=EMPLOYEES,
        incidents=INCIDENTS,
        bonus_templates=BONUS_TEMPLATES,
        vacation_requests=VACATION_REQUESTS,
        users=tuple(USERS.values()),
        attendance_logs=attendance,
    )
