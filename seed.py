"""
Seed data.

Run with: python seed.py

Creates the tables, then (only when no super admin exists yet) the platform
super admin and a demo tenant on the pro plan with an admin, two users, two
projects and a few tasks.
"""

import asyncio
import logging
from datetime import date

from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.database import build_engine, build_session_factory
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.password import hash_password
from src.domain.entities import (
    Project,
    ProjectStatus,
    SubscriptionPlan,
    Task,
    TaskPriority,
    TaskStatus,
    Tenant,
    TenantStatus,
    User,
    UserRole,
    limits_for,
)

logger = logging.getLogger(__name__)

DEMO_SUBDOMAIN = "demo"
DEMO_ADMIN_PASSWORD = "Demo@123"
DEMO_USER_PASSWORD = "User@123"


async def seed(uow: SqlAlchemyUnitOfWork) -> bool:
    """
    Insert the seed rows.

    Idempotent: returns False without writing when a super admin exists.
    """
    async with uow:
        if await uow.users.has_super_admin():
            logger.info("Seed data already present, skipping")
            return False

        await uow.users.create(
            User(
                tenant_id=None,
                email=ApplicationConfig.SEED_SUPER_ADMIN_EMAIL.lower(),
                password_hash=hash_password(ApplicationConfig.SEED_SUPER_ADMIN_PASSWORD),
                full_name="Super Admin",
                role=UserRole.super_admin,
            )
        )

        limits = limits_for(SubscriptionPlan.pro)
        tenant = await uow.tenants.create(
            Tenant(
                name="Demo Company",
                subdomain=DEMO_SUBDOMAIN,
                status=TenantStatus.active,
                subscription_plan=SubscriptionPlan.pro,
                max_users=limits["max_users"],
                max_projects=limits["max_projects"],
            )
        )

        admin = await uow.users.create(
            User(
                tenant_id=tenant.id,
                email="admin@demo.com",
                password_hash=hash_password(DEMO_ADMIN_PASSWORD),
                full_name="Demo Admin",
                role=UserRole.tenant_admin,
            )
        )
        user_password_hash = hash_password(DEMO_USER_PASSWORD)
        user_one = await uow.users.create(
            User(
                tenant_id=tenant.id,
                email="user1@demo.com",
                password_hash=user_password_hash,
                full_name="User One",
                role=UserRole.user,
            )
        )
        user_two = await uow.users.create(
            User(
                tenant_id=tenant.id,
                email="user2@demo.com",
                password_hash=user_password_hash,
                full_name="User Two",
                role=UserRole.user,
            )
        )

        alpha = await uow.projects.create(
            Project(
                tenant_id=tenant.id,
                name="Project Alpha",
                description="First demo project",
                status=ProjectStatus.active,
                created_by=admin.id,
            )
        )
        beta = await uow.projects.create(
            Project(
                tenant_id=tenant.id,
                name="Project Beta",
                description="Second demo project",
                status=ProjectStatus.active,
                created_by=admin.id,
            )
        )

        # (project, title, description, status, priority, assignee, due date)
        tasks = [
            (alpha, "Design", "Create mockups", TaskStatus.todo, TaskPriority.high, user_one, date(2025, 12, 31)),
            (alpha, "Frontend", "Implement UI", TaskStatus.in_progress, TaskPriority.high, user_two, date(2026, 1, 15)),
            (alpha, "Testing", "QA testing", TaskStatus.todo, TaskPriority.medium, None, date(2026, 1, 20)),
            (beta, "Backend", "API development", TaskStatus.in_progress, TaskPriority.high, user_one, date(2026, 1, 10)),
            (beta, "Documentation", "Write docs", TaskStatus.completed, TaskPriority.low, user_two, None),
        ]
        for project, title, description, task_status, priority, assignee, due in tasks:
            await uow.tasks.create(
                Task(
                    project_id=project.id,
                    tenant_id=tenant.id,
                    title=title,
                    description=description,
                    status=task_status,
                    priority=priority,
                    assigned_to=assignee.id if assignee else None,
                    due_date=due,
                )
            )

        await uow.commit()

    logger.info("Seeded super admin and demo tenant '%s'", DEMO_SUBDOMAIN)
    return True


async def main() -> None:
    engine = build_engine(ApplicationConfig.DB_URI, echo=ApplicationConfig.SQL_ECHO)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = build_session_factory(engine)
    async with session_factory() as session:
        await seed(SqlAlchemyUnitOfWork(session))

    await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    asyncio.run(main())
