#!/usr/bin/env python3
"""
Database reset and seed script for SkillBridge.

Wipes every table and loads a small marketplace: course categories, tutors
with profiles, learners, courses, enrollments, paid trial bookings and a
few reviews. All accounts share the password ``password123``.

Usage:
    python scripts/seed_data.py
"""

from datetime import timedelta
import logging
from pathlib import Path
import sys
from typing import Dict, List

# Add the parent directory to the path so we can import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session

from app.auth import get_password_hash
from app.core.timezone_utils import utc_now
from app.database import SessionLocal
from app.init_db import init_db
from app.models import (
    Booking,
    BookingStatus,
    Course,
    CourseCategory,
    Enrollment,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Review,
    ReviewRequest,
    ReviewStatus,
    Tutor,
    User,
    UserRole,
)

# Set up logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"

CATEGORIES = [
    "Programming",
    "Languages",
    "Music",
    "Art & Design",
    "Business",
    "Fitness",
    "Cooking",
    "Photography",
    "Others",
]

TUTORS = [
    {
        "name": "Sarah Johnson",
        "email": "sarah.johnson@example.com",
        "image": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150",
        "bio": "Full-stack developer with 8+ years of experience teaching React, Node.js and TypeScript.",
        "hourly_rate": 75,
        "specialties": ["React", "Node.js", "TypeScript", "JavaScript", "Web Development"],
        "availability": "Flexible - All days",
        "timezone": "UTC-08:00 Pacific Time",
    },
    {
        "name": "Michael Chen",
        "email": "michael.chen@example.com",
        "image": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150",
        "bio": "Native Mandarin speaker and certified language instructor for conversational and business Chinese.",
        "hourly_rate": 50,
        "specialties": ["Mandarin Chinese", "Business Chinese", "Conversational Chinese"],
        "availability": "Weekdays only",
        "timezone": "UTC-08:00 Pacific Time",
    },
    {
        "name": "Emily Rodriguez",
        "email": "emily.rodriguez@example.com",
        "image": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=150",
        "bio": "Professional guitarist and music teacher with 10+ years of performance experience.",
        "hourly_rate": 60,
        "specialties": ["Guitar", "Music Theory", "Songwriting", "Performance"],
        "availability": "Flexible - All days",
        "timezone": "UTC-05:00 Eastern Time",
    },
    {
        "name": "David Thompson",
        "email": "david.thompson@example.com",
        "image": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150",
        "bio": "Graphic designer and illustrator teaching digital art and brand design.",
        "hourly_rate": 55,
        "specialties": ["Illustration", "Adobe Photoshop", "Branding"],
        "availability": "Weekends only",
        "timezone": "UTC-06:00 Central Time",
    },
    {
        "name": "Maria Garcia",
        "email": "maria.garcia@example.com",
        "image": "https://images.unsplash.com/photo-1544005313-94ddf0286df2?w=150",
        "bio": "Certified personal trainer focused on strength and mobility for busy professionals.",
        "hourly_rate": 45,
        "specialties": ["Strength Training", "Yoga", "Nutrition"],
        "availability": "Mornings",
        "timezone": "UTC-07:00 Mountain Time",
    },
    {
        "name": "James Wilson",
        "email": "james.wilson@example.com",
        "image": "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?w=150",
        "bio": "Startup founder and MBA mentoring first-time founders on strategy and finance.",
        "hourly_rate": 90,
        "specialties": ["Entrepreneurship", "Finance", "Strategy"],
        "availability": "Evenings",
        "timezone": "UTC-05:00 Eastern Time",
    },
]

LEARNERS = [
    ("Alex Brown", "alex.brown@example.com", "https://images.unsplash.com/photo-1535713875002-d1d0cf377fde?w=150"),
    ("Jessica Lee", "jessica.lee@example.com", "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150"),
    ("Robert Taylor", "robert.taylor@example.com", "https://images.unsplash.com/photo-1599566150163-29194dcaad36?w=150"),
    ("Sophie Anderson", "sophie.anderson@example.com", "https://images.unsplash.com/photo-1517841905240-472988babdf9?w=150"),
]

# (tutor index, category, title, difficulty, hours, trial, full, days)
COURSES = [
    (0, "Programming", "Complete JavaScript Fundamentals", "beginner", 40, 25.0, 800.0, ["monday", "wednesday"]),
    (0, "Programming", "React Development Masterclass", "intermediate", 60, 40.0, 1200.0, ["tuesday", "thursday"]),
    (1, "Languages", "Conversational Mandarin Chinese", "beginner", 30, 30.0, 600.0, ["monday", "friday"]),
    (1, "Languages", "Business Chinese Communication", "advanced", 25, 50.0, 750.0, ["wednesday"]),
    (2, "Music", "Guitar Fundamentals for Beginners", "beginner", 20, 35.0, 500.0, ["saturday"]),
    (3, "Art & Design", "Digital Illustration Basics", "beginner", 24, 30.0, 550.0, ["sunday"]),
    (4, "Fitness", "Strength Training 101", "beginner", 16, 20.0, 300.0, ["tuesday", "saturday"]),
    (5, "Business", "Launching Your First Startup", "intermediate", 18, 60.0, 900.0, ["thursday"]),
]

REVIEW_COMMENTS = [
    "Clear explanations and great pacing. Highly recommended!",
    "Very patient tutor, I learned a lot in one session.",
    "Good content, would love more practice exercises.",
]


def clear_database(db: Session) -> None:
    logger.info("Clearing existing data...")
    for model in (ReviewRequest, Review, Payment, Booking, Enrollment, Course, Tutor, User, CourseCategory):
        db.query(model).delete(synchronize_session=False)
    db.commit()


def seed(db: Session) -> Dict[str, int]:
    hashed = get_password_hash(SEED_PASSWORD)

    logger.info("Creating course categories...")
    categories = {name: CourseCategory(name=name) for name in CATEGORIES}
    db.add_all(categories.values())

    logger.info("Creating tutors...")
    tutors: List[Tutor] = []
    for data in TUTORS:
        user = User(
            name=data["name"],
            email=data["email"],
            hashed_password=hashed,
            role=UserRole.TUTOR.value,
            profile_image_url=data["image"],
        )
        tutor = Tutor(
            user=user,
            bio=data["bio"],
            hourly_rate=data["hourly_rate"],
            specialties=data["specialties"],
            availability=data["availability"],
            session_duration="1 hour",
            language="English",
            timezone=data["timezone"],
        )
        db.add(tutor)
        tutors.append(tutor)

    logger.info("Creating learners...")
    learners = [
        User(name=name, email=email, hashed_password=hashed, role=UserRole.LEARNER.value, profile_image_url=image)
        for name, email, image in LEARNERS
    ]
    db.add_all(learners)

    logger.info("Creating courses...")
    now = utc_now()
    courses: List[Course] = []
    for tutor_index, category, title, difficulty, hours, trial, full, days in COURSES:
        course = Course(
            tutor=tutors[tutor_index],
            category=categories[category],
            title=title,
            short_description=f"{title} with hands-on sessions and personal feedback.",
            overview=f"{title} takes you step by step from the basics to confident practice.",
            difficulty=difficulty,
            prerequisites=[] if difficulty == "beginner" else ["Basic knowledge of the subject"],
            skills_learned=["Core concepts", "Practical exercises", "Real-world projects"],
            total_hours=hours,
            schedule=[{"days": days, "startTime": "18:00", "endTime": "19:30", "timezone": "UTC-08:00"}],
            image_url="/placeholder.svg",
            trial_rate=trial,
            full_course_rate=full,
            start_date=now - timedelta(days=14),
            end_date=now + timedelta(days=60),
        )
        db.add(course)
        courses.append(course)
    db.flush()

    logger.info("Creating enrollments, bookings and reviews...")
    enrollments = bookings = reviews = 0
    for index, learner in enumerate(learners):
        for offset in range(2):
            course = courses[(index * 2 + offset) % len(courses)]
            db.add(Enrollment(student_id=learner.id, course_id=course.id, progress=25.0 * offset))
            enrollments += 1

            booking = Booking(
                learner_id=learner.id,
                tutor_id=course.tutor_id,
                course_id=course.id,
                session_date=now - timedelta(days=7 - index),
                duration_min=60,
                status=BookingStatus.COMPLETED.value,
            )
            booking.payment = Payment(
                amount=course.trial_rate,
                payment_method=PaymentMethod.STRIPE.value,
                payment_status=PaymentStatus.COMPLETED.value,
                transaction_id=f"seed_{index}_{offset}",
            )
            db.add(booking)
            bookings += 1

            if offset == 0:
                db.add(
                    Review(
                        booking=booking,
                        reviewer_id=learner.id,
                        tutor_id=course.tutor_id,
                        course_id=course.id,
                        rating=5 - (index % 2),
                        comment=REVIEW_COMMENTS[index % len(REVIEW_COMMENTS)],
                        status=ReviewStatus.ACCEPTED.value,
                        approved_at=now,
                    )
                )
                reviews += 1

    db.commit()
    return {
        "categories": len(categories),
        "tutors": len(tutors),
        "learners": len(learners),
        "courses": len(courses),
        "enrollments": enrollments,
        "bookings": bookings,
        "reviews": reviews,
    }


def main() -> None:
    init_db()
    db = SessionLocal()
    try:
        clear_database(db)
        counts = seed(db)
        logger.info("Seed complete: %s", ", ".join(f"{k}={v}" for k, v in counts.items()))
        logger.info("All accounts use the password %r", SEED_PASSWORD)
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
