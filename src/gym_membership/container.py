from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import MembershipService
from .plans.mysql_plan_repository import MySQLPlanRepository
from .plans.repository import PlanRepository
from .plans.service import PlanService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    members_repo: MemberRepository
    plans_repo: PlanRepository
    payments_repo: PaymentRepository
    attendance_repo: AttendanceRepository

    member_service: MemberService
    plan_service: PlanService
    membership_service: MembershipService
    attendance_service: AttendanceService


def wire_services(
    *,
    conn: DatabaseConnection,
    members_repo: MemberRepository,
    plans_repo: PlanRepository,
    payments_repo: PaymentRepository,
    attendance_repo: AttendanceRepository,
    require_active_subscription: bool = False,
) -> Container:
    membership_service = MembershipService(payments_repo, members_repo, plans_repo)
    return Container(
        conn=conn,
        members_repo=members_repo,
        plans_repo=plans_repo,
        payments_repo=payments_repo,
        attendance_repo=attendance_repo,
        member_service=MemberService(members_repo, plans_repo),
        plan_service=PlanService(plans_repo),
        membership_service=membership_service,
        attendance_service=AttendanceService(
            attendance_repo,
            members_repo,
            membership_service,
            require_active_subscription=require_active_subscription,
        ),
    )


def build_container(*, db_config: dict, require_active_subscription: bool = False) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_services(
        conn=conn,
        members_repo=MySQLMemberRepository(conn),
        plans_repo=MySQLPlanRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        require_active_subscription=require_active_subscription,
    )
