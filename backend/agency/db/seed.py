"""Database seed data for local development."""
from datetime import datetime, timedelta
from agency.db.base import Base, engine, session_scope
from agency.db.models import User, UserRole, Client, PRStatus, TransferStatus, AppointmentStatus
from agency.core.security import get_password_hash

SEED_USERS = [
    {"email": "admin@agency.com", "password": "Admin@123", "full_name": "Admin User", "role": UserRole.ADMIN},
    {"email": "moderator@agency.com", "password": "Moderator@123", "full_name": "Moderator User", "role": UserRole.MODERATOR},
    {"email": "pr@agency.com", "password": "Pr@12345", "full_name": "PR User", "role": UserRole.PR},
    {"email": "research@agency.com", "password": "Research@123", "full_name": "Research User", "role": UserRole.MARKET_RESEARCHER},
    {"email": "creative@agency.com", "password": "Creative@123", "full_name": "Creative User", "role": UserRole.CREATIVE},
    {"email": "content@agency.com", "password": "Content@123", "full_name": "Content User", "role": UserRole.CONTENT},
]


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
    print("Database tables created.")


def seed_users(db):
    """Seed one user per role."""
    for user_data in SEED_USERS:
        existing = db.query(User).filter(User.email == user_data["email"]).first()
        if not existing:
            user = User(
                email=user_data["email"],
                password_hash=get_password_hash(user_data["password"]),
                full_name=user_data["full_name"],
                role=user_data["role"],
                is_active=True
            )
            db.add(user)
            print(f"Created user: {user_data['email']}")
        else:
            print(f"User already exists: {user_data['email']}")

    # make the users visible to seed_clients
    db.flush()


def seed_clients(db):
    """Seed a few clients registered by the moderator and assigned to the PR user."""
    if db.query(Client).count() > 0:
        print("Clients already seeded")
        return

    moderator = db.query(User).filter(User.role == UserRole.MODERATOR).first()
    pr = db.query(User).filter(User.role == UserRole.PR).first()
    now = datetime.now()

    clients = [
        {"name": "Nile Bakery", "phone": "01000000001", "business_field": "Food & Beverage",
         "service_requests": {"market_research": True, "content": True, "creative": True}},
        {"name": "Delta Motors", "phone": "01000000002", "business_field": "Automotive",
         "service_requests": {"market_research": False, "content": False, "creative": True}},
        {"name": "Cairo Dental Clinic", "phone": "01000000003", "business_field": "Healthcare",
         "service_requests": {"market_research": True, "content": False, "creative": False}},
    ]

    for i, client_data in enumerate(clients):
        client = Client(
            name=client_data["name"],
            phone=client_data["phone"],
            business_field=client_data["business_field"],
            basic_info={"email": f"client{i + 1}@example.com", "address": "", "notes": ""},
            registered_by=moderator.user_id if moderator else None,
            registered_at=now - timedelta(days=i),
            assigned_to_pr=pr.user_id if pr else None,
            pr_status=PRStatus.PENDING,
            transfer_status=TransferStatus.ACTIVE,
            service_requests=client_data["service_requests"],
            pr_appointments=[{
                "date": now.replace(hour=10, minute=0, second=0, microsecond=0).isoformat(),
                "time": "10:00",
                "status": AppointmentStatus.SCHEDULED.value,
            }] if i == 0 else [],
        )
        db.add(client)
        print(f"Created client: {client_data['name']}")


def run_seed():
    """Run all seed functions."""
    print("Starting database seeding...")

    create_tables()

    with session_scope() as db:
        seed_users(db)
        seed_clients(db)

    print("\nDatabase seeding completed successfully!")
    print("\nTest credentials:")
    for user_data in SEED_USERS:
        print(f"  {user_data['role'].value}: {user_data['email']} / {user_data['password']}")


if __name__ == "__main__":
    run_seed()
