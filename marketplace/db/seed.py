# marketplace/db/seed.py
"""
Demo data for an empty database.

Run with ``python -m marketplace.db.seed`` or set ``SEED_DEMO_DATA=true``
to seed on application startup.  Nothing is inserted if any user exists.
Demo accounts use the password ``password123``; the ``customer`` and
``provider`` accounts use ``password``.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from marketplace.core.security import hash_password
from marketplace.db.models.category import ServiceCategory
from marketplace.db.models.event_request import EventRequest, RequestStatus
from marketplace.db.models.provider import ServiceProvider
from marketplace.db.models.review import Review
from marketplace.db.models.user import Role, User
from marketplace.services.review_service import recalculate_provider_rating

logger = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/{}?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80"

CATEGORIES = [
    ("Wedding Events", "From intimate ceremonies to grand celebrations, we provide comprehensive wedding planning services.", "photo-1511795409834-ef04bbd61622"),
    ("Birthday Celebrations", "Create unforgettable birthday experiences with our themed party planning and decoration services.", "photo-1530103862676-de8c9debad1d"),
    ("Corporate Events", "Professional planning for conferences, team-building activities, and corporate celebrations.", "photo-1515187029135-18ee286d815b"),
    ("Anniversary Events", "Celebrate your special milestones with romantic anniversary planning and coordination.", "photo-1602631985686-1bb0e6a8696e"),
    ("Farewell Parties", "Give a proper send-off with our farewell event planning and nostalgic themed decorations.", "photo-1529333166437-7750a6dd5a70"),
    ("Festival & Cultural Events", "Organize cultural celebrations and festivals with authentic themes and traditional elements.", "photo-1504196606672-aef5c9cefc92"),
]

# username, email, full name, password
PROVIDER_USERS = [
    ("elegant_affairs", "contact@elegantaffairs.com", "Elegant Affairs", "password123"),
    ("party_perfect", "info@partyperfect.com", "Party Perfect", "password123"),
    ("summit_events", "contact@summitevents.com", "Summit Events", "password123"),
    ("celebration_experts", "info@celebrationexperts.com", "Celebration Experts", "password123"),
    ("event_masters", "contact@eventmasters.com", "Event Masters", "password123"),
    ("festive_planners", "info@festiveplanners.com", "Festive Planners", "password123"),
    ("provider", "provider@example.com", "Test Provider", "password"),
]

CUSTOMER_USERS = [
    ("sarah_m", "sarah@example.com", "Sarah Johnson", "password123"),
    ("james_t", "james@example.com", "James Thompson", "password123"),
    ("lisa_p", "lisa@example.com", "Lisa Peterson", "password123"),
    ("robert_j", "robert@example.com", "Robert Johnson", "password123"),
    ("customer", "customer@example.com", "Test Customer", "password"),
]

# company, description, location, experience, contact, category index, tags, image
PROVIDER_PROFILES = [
    ("Elegant Affairs", "Creating magical wedding experiences with personalized themes and attention to every detail. Specialized in luxury weddings.",
     "New York, NY", 8, "contact@elegantaffairs.com | (555) 123-4567", 0, ["Weddings", "Engagement", "Receptions"], "photo-1519741497674-611481863552"),
    ("Party Perfect", "Specializing in creative birthday celebrations for all ages with custom themes, entertainment, and memorable experiences.",
     "Los Angeles, CA", 5, "info@partyperfect.com | (555) 987-6543", 1, ["Birthdays", "Kids Events", "Themed Parties"], "photo-1533174072545-7a4b6ad7a6a3"),
    ("Summit Events", "Professional corporate event management with expertise in conferences, product launches, and executive retreats.",
     "Chicago, IL", 10, "contact@summitevents.com | (555) 456-7890", 2, ["Conferences", "Team Building", "Corporate Galas"], "photo-1517048676732-d65bc937f952"),
    ("Celebration Experts", "Anniversary celebration specialists creating memorable moments for couples celebrating any milestone year.",
     "Boston, MA", 6, "info@celebrationexperts.com | (555) 234-5678", 3, ["Anniversaries", "Romantic Events", "Milestone Celebrations"], "photo-1511795409834-ef04bbd61622"),
    ("Event Masters", "Expert farewell party planners specializing in memorable send-offs for retiring employees or relocating friends.",
     "Seattle, WA", 7, "contact@eventmasters.com | (555) 876-5432", 4, ["Farewells", "Retirement Parties", "Going Away Events"], "photo-1529333166437-7750a6dd5a70"),
    ("Festive Planners", "Cultural event specialists creating authentic cultural experiences for various festivals and traditional celebrations.",
     "Miami, FL", 9, "info@festiveplanners.com | (555) 345-6789", 5, ["Cultural Events", "Festivals", "Traditional Celebrations"], "photo-1504196606672-aef5c9cefc92"),
    ("Test Provider Services", "This is a test provider account that you can use to try out provider features.",
     "Test City, CA", 5, "provider@example.com | (555) 123-4567", 0, ["Testing", "Demo", "Examples"], "photo-1511795409834-ef04bbd61622"),
]

# provider index, customer index, rating, comment
REVIEWS = [
    (0, 0, 5, "Amazing wedding planning service! Everything was perfect."),
    (0, 1, 4, "Great attention to detail, would recommend."),
    (1, 2, 5, "The birthday party was a huge hit with all the kids!"),
    (1, 3, 5, "Incredibly creative themes and decorations."),
    (2, 0, 4, "Very professional corporate event management."),
    (2, 1, 4, "Our conference ran smoothly thanks to Summit Events."),
    (3, 2, 5, "Made our 10th anniversary truly special!"),
    (3, 3, 4, "Beautiful decorations and excellent service."),
    (4, 0, 4, "Great farewell party organization."),
    (4, 1, 4, "Creative and emotional farewell event."),
    (5, 2, 5, "Authentic cultural elements made the festival amazing!"),
    (5, 3, 4, "Excellent attention to traditional details."),
]

# customer index, provider index, title, description, days ahead, status
EVENT_REQUESTS = [
    (0, 0, "Summer Wedding", "Planning a summer wedding for 150 guests", 60, RequestStatus.ACCEPTED),
    (1, 2, "Annual Corporate Retreat", "Team building event for 50 employees", 90, RequestStatus.COMPLETED),
    (2, 1, "Sweet 16 Birthday", "Planning a sweet 16 party with a Hollywood theme", 30, RequestStatus.PENDING),
    (3, 3, "25th Anniversary Celebration", "Silver anniversary dinner for 40 guests", 120, RequestStatus.ACCEPTED),
    (4, 6, "Test Wedding Event", "This is a test event request for demo purposes", 30, RequestStatus.PENDING),
]


def _make_users(db: Session, rows, role: str):
    users = [
        User(username=u, email=e, full_name=n, role=role, password_hash=hash_password(p))
        for u, e, n, p in rows
    ]
    db.add_all(users)
    return users


def seed_database(db: Session) -> bool:
    """Insert demo data. Returns False when the database already has users."""
    if db.query(User).first() is not None:
        logger.info("Database already has data, skipping seed")
        return False

    categories = [
        ServiceCategory(name=name, description=description, image_url=_IMG.format(image))
        for name, description, image in CATEGORIES
    ]
    db.add_all(categories)

    provider_users = _make_users(db, PROVIDER_USERS, Role.PROVIDER)
    customers = _make_users(db, CUSTOMER_USERS, Role.CUSTOMER)
    db.flush()

    providers = []
    for owner, (company, description, location, experience, contact, cat_idx, tags, image) in zip(provider_users, PROVIDER_PROFILES):
        providers.append(ServiceProvider(
            user_id=owner.id,
            category_id=categories[cat_idx].id,
            company_name=company,
            description=description,
            location=location,
            experience=experience,
            contact_info=contact,
            tags=tags,
            image_url=_IMG.format(image),
            rating=0.0,
            review_count=0,
        ))
    db.add_all(providers)
    db.flush()

    db.add_all([
        Review(provider_id=providers[p].id, customer_id=customers[c].id, rating=rating, comment=comment)
        for p, c, rating, comment in REVIEWS
    ])
    db.flush()
    for provider in providers:
        recalculate_provider_rating(db, provider)

    now = datetime.utcnow()
    db.add_all([
        EventRequest(
            customer_id=customers[c].id,
            provider_id=providers[p].id,
            category_id=providers[p].category_id,
            title=title,
            description=description,
            event_date=now + timedelta(days=days),
            status=status,
        )
        for c, p, title, description, days, status in EVENT_REQUESTS
    ])

    db.commit()
    logger.info(
        "Seeded %s categories, %s users, %s providers, %s reviews, %s event requests",
        len(categories), len(provider_users) + len(customers), len(providers), len(REVIEWS), len(EVENT_REQUESTS),
    )
    return True


if __name__ == "__main__":
    from marketplace.core.config import settings
    from marketplace.core.logging_config import setup_logging
    from marketplace.db.base import SessionLocal, init_db

    setup_logging(settings.log_level)
    init_db()
    session = SessionLocal()
    try:
        seed_database(session)
    finally:
        session.close()
