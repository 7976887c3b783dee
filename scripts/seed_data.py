"""
Seed Data Script
Populates database with sample accounts and projects for local development
"""
from datetime import date, timedelta

from loguru import logger

from bto_allocation.container import build_container
from bto_allocation.domain.enums import FlatType, MaritalStatus, UserRole


SAMPLE_USERS = [
    # (role, nric, age, marital status)
    (UserRole.APPLICANT, "S1234567A", 35, MaritalStatus.SINGLE),
    (UserRole.APPLICANT, "T7654321B", 40, MaritalStatus.MARRIED),
    (UserRole.APPLICANT, "S9876543C", 37, MaritalStatus.MARRIED),
    (UserRole.APPLICANT, "T2345678D", 30, MaritalStatus.SINGLE),
    (UserRole.HDB_OFFICER, "T2109876H", 36, MaritalStatus.SINGLE),
    (UserRole.HDB_OFFICER, "S6543210I", 28, MaritalStatus.MARRIED),
    (UserRole.HDB_MANAGER, "T8765432F", 29, MaritalStatus.SINGLE),
    (UserRole.HDB_MANAGER, "S5678901G", 26, MaritalStatus.MARRIED),
]


def seed_database():
    """Seed database with sample data"""
    
    container = build_container()
    if container.catalog.users.list_all():
        logger.warning("Database already has users; nothing seeded")
        container.close()
        return
    
    password = container.config.DEFAULT_PASSWORD or "password"
    for role, nric, age, marital_status in SAMPLE_USERS:
        container.auth.register(role, nric, password, age, marital_status)
    container.save()
    
    today = date.today()
    projects = [
        ("T8765432F", {
            "name": "Acacia Breeze",
            "neighborhood": "Yishun",
            "flat_units": {FlatType.TWO_ROOM: 2, FlatType.THREE_ROOM: 3},
            "open_date": today - timedelta(days=7),
            "close_date": today + timedelta(days=30),
            "max_officer_slots": 3,
            "visible": True,
        }),
        ("S5678901G", {
            "name": "Cedar Grove",
            "neighborhood": "Tampines",
            "flat_units": {FlatType.TWO_ROOM: 5, FlatType.THREE_ROOM: 0},
            "open_date": today,
            "close_date": today + timedelta(days=60),
            "visible": True,
        }),
    ]
    for manager_nric, request in projects:
        manager = container.catalog.users.get_by_nric(manager_nric)
        result = container.engine.create_project(manager, request)
        if not result:
            raise RuntimeError(f"Could not seed project {request['name']}: {result.message}")
    
    container.save()
    container.close()
    
    logger.success("Database seeded successfully!")
    logger.info(f"  - Created {len(SAMPLE_USERS)} users")
    logger.info(f"  - Created {len(projects)} visible projects")
    logger.info(f"  - Every account uses password: {password}")


if __name__ == "__main__":
    seed_database()
