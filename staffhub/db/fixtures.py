"""
Hard-coded seed data for the local store.

Functions return fresh objects so every store starts from the same state.
"""

from __future__ import annotations

from datetime import date

from staffhub.schemas.attendance import AttendanceRecord, AttendanceStatus
from staffhub.schemas.employee import Employee
from staffhub.schemas.leave import EmployeeSnapshot, LeaveRequest, LeaveStatus
from staffhub.schemas.project import Project, ProjectAssignment, ProjectStatus


def employees() -> list[Employee]:
    return [
        Employee(
            id=65,
            name="John Doe",
            email="john.doe@company.com",
            designation="Software Developer",
            department="Engineering",
            joining_date=date(2022, 1, 15),
            is_available=False,
            skills="Java, Spring Boot, Angular",
        ),
        Employee(
            id=66,
            name="Jane Smith",
            email="jane.smith@company.com",
            designation="QA Engineer",
            department="Quality Assurance",
            joining_date=date(2022, 6, 1),
            is_available=False,
            skills="Selenium, Python, Manual Testing",
        ),
        Employee(
            id=67,
            name="Mike Johnson",
            email="mike.johnson@company.com",
            designation="Backend Developer",
            department="Engineering",
            joining_date=date(2023, 2, 20),
            is_available=False,
            skills="Python, Django, PostgreSQL",
        ),
        Employee(
            id=68,
            name="Sarah Wilson",
            email="sarah.wilson@company.com",
            designation="UI/UX Designer",
            department="Design",
            joining_date=date(2023, 9, 4),
            is_available=False,
            skills="Figma, CSS, User Research",
        ),
        Employee(
            id=69,
            name="Priya Patel",
            email="priya.patel@company.com",
            designation="Business Analyst",
            department="Product",
            joining_date=date(2024, 1, 8),
            is_available=True,
            skills="SQL, Excel, Python",
        ),
    ]


# Display fields stamped into leave requests and assignments.
EMPLOYEES = {
    e.id: EmployeeSnapshot(id=e.id, name=e.name, email=e.email) for e in employees()
}

# employee id -> one status letter per day starting 2024-03-01 (P = present, A = absent)
_ATTENDANCE_PATTERN = {
    65: "PPPPPPPAP",
    66: "PAPPAP",
    67: "PPAA",
    68: "PPPPP",
}


def attendance_records() -> list[AttendanceRecord]:
    records = []
    for employee_id, pattern in _ATTENDANCE_PATTERN.items():
        for offset, mark in enumerate(pattern):
            present = mark == "P"
            records.append(
                AttendanceRecord(
                    employee_id=employee_id,
                    date=date(2024, 3, 1 + offset),
                    status=AttendanceStatus.PRESENT if present else AttendanceStatus.ABSENT,
                    check_in_time="09:00" if present else None,
                    check_out_time="18:00" if present else None,
                )
            )
    return records


def leave_requests() -> list[LeaveRequest]:
    return [
        LeaveRequest(
            id=1,
            start_date=date(2024, 3, 11),
            end_date=date(2024, 3, 12),
            reason="Family function",
            status=LeaveStatus.APPROVED,
            employee=EMPLOYEES[65],
        ),
        LeaveRequest(
            id=2,
            start_date=date(2024, 4, 2),
            end_date=date(2024, 4, 5),
            reason="Vacation",
            status=LeaveStatus.PENDING,
            employee=EMPLOYEES[65],
        ),
        LeaveRequest(
            id=3,
            start_date=date(2024, 3, 20),
            end_date=date(2024, 3, 20),
            reason="Medical appointment",
            status=LeaveStatus.PENDING,
            employee=EMPLOYEES[66],
        ),
        LeaveRequest(
            id=4,
            start_date=date(2024, 3, 25),
            end_date=date(2024, 3, 29),
            reason="Personal travel",
            status=LeaveStatus.REJECTED,
            employee=EMPLOYEES[67],
        ),
    ]


def projects() -> list[Project]:
    return [
        Project(
            id=1,
            name="Employee Portal Revamp",
            description="Rebuild the internal self-service portal",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
            status=ProjectStatus.ACTIVE,
        ),
        Project(
            id=2,
            name="Payroll Integration",
            description="Connect attendance data to the payroll provider",
            start_date=date(2024, 2, 1),
            end_date=date(2024, 8, 31),
            status=ProjectStatus.ON_HOLD,
            progress=40,
        ),
        Project(
            id=3,
            name="Mobile Attendance App",
            description="Check-in from mobile devices",
            start_date=date(2024, 6, 1),
            end_date=date(2025, 3, 31),
            status=ProjectStatus.PLANNING,
        ),
    ]


def _assignment(
    assignment_id: int, employee_id: int, project: Project, role: str, *, active: bool = True
) -> ProjectAssignment:
    return ProjectAssignment(
        id=assignment_id,
        employee_id=employee_id,
        project_id=project.id,
        employee_name=EMPLOYEES[employee_id].name or "",
        project_name=project.name,
        role=role,
        assigned_by="Project Manager",
        active=active,
    )


def assignments() -> list[ProjectAssignment]:
    portal, payroll, mobile = projects()
    return [
        _assignment(1, 65, portal, "Developer"),
        _assignment(2, 66, portal, "QA Engineer"),
        _assignment(3, 67, payroll, "Developer"),
        _assignment(4, 68, mobile, "Designer"),
        # Earlier stint on the portal, superseded by assignment #1.
        _assignment(5, 65, portal, "Intern", active=False),
    ]
