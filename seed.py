from datetime import timedelta

from reactivities.auth import get_password_hash
from reactivities.database import SessionLocal, engine, Base, utcnow
from reactivities.models import Activity, ActivityAttendee, Comment, User, UserFollowing

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Only seed an empty database
if db.query(User).count():
    print("Database already seeded")
    db.close()
    raise SystemExit(0)

users = [
    User(email="bob@test.com", display_name="Bob", hashed_password=get_password_hash("Pa$$w0rd")),
    User(email="tom@test.com", display_name="Tom", hashed_password=get_password_hash("Pa$$w0rd")),
    User(email="jane@test.com", display_name="Jane", hashed_password=get_password_hash("Pa$$w0rd")),
]
db.add_all(users)
db.flush()
bob, tom, jane = users

now = utcnow()

# (title, days from now, category, city, venue, host, other attendees)
activity_data = [
    ("Past Activity 1", -60, "drinks", "London", "The Lamb and Flag", bob, [tom]),
    ("Past Activity 2", -30, "culture", "Paris", "The Louvre", tom, [bob, jane]),
    ("Future Activity 1", 30, "music", "London", "Wembly Stadium", jane, [bob]),
    ("Future Activity 2", 60, "food", "London", "Jamies Italian", bob, []),
    ("Future Activity 3", 90, "drinks", "London", "Pub", tom, [jane]),
    ("Future Activity 4", 120, "culture", "London", "British Museum", jane, [tom, bob]),
    ("Future Activity 5", 150, "film", "London", "Cinema", bob, [jane]),
    ("Future Activity 6", 180, "travel", "London", "Somewhere on the Thames", tom, []),
]

for title, days, category, city, venue, host, others in activity_data:
    activity = Activity(
        title=title,
        description=f"Activity {abs(days)} days {'ago' if days < 0 else 'in future'}",
        category=category,
        date=now + timedelta(days=days),
        city=city,
        venue=venue,
    )
    db.add(activity)
    db.flush()
    db.add(ActivityAttendee(user_id=host.id, activity_id=activity.id, is_host=True))
    for attendee in others:
        db.add(ActivityAttendee(user_id=attendee.id, activity_id=activity.id, is_host=False))
    db.add(Comment(activity_id=activity.id, user_id=host.id, body=f"Looking forward to {title}!"))

db.add_all([
    UserFollowing(observer_id=bob.id, target_id=tom.id),
    UserFollowing(observer_id=bob.id, target_id=jane.id),
    UserFollowing(observer_id=tom.id, target_id=bob.id),
    UserFollowing(observer_id=jane.id, target_id=tom.id),
])

db.commit()
db.close()

print("Database seeded successfully!")
print(f"  - {len(users)} users")
print(f"  - {len(activity_data)} activities")
