# backend/tests/conftest.py
"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired
to it, and factories for users, tutors, categories and courses.
"""

import os

# Configure the app for tests before anything imports settings
os.environ["IS_TESTING"] = "true"
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ["SITE_URL"] = "http://localhost:3000"
os.environ["ZOOM_ACCOUNT_ID"] = "test-account"
os.environ["ZOOM_CLIENT_ID"] = "test-client"
os.environ["ZOOM_CLIENT_SECRET"] = "test-secret"

from datetime import timedelta
from typing import Any, Callable, Dict, Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  registers the tables
from app.auth import get_password_hash
from app.core.timezone_utils import utc_now
from app.database import Base, configure_sqlite, get_db
from app.main import app
from app.models.booking import Booking, BookingStatus
from app.models.course import Course, CourseCategory
from app.models.enrollment import Enrollment
from app.models.payment import Payment, PaymentStatus
from app.models.tutor import Tutor
from app.models.user import User, UserRole
from tests.helpers.auth import auth_headers_for

TEST_PASSWORD = "password123"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
configure_sqlite(test_engine)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False)

# bcrypt is slow on purpose; hash the shared password once
_HASHED_TEST_PASSWORD = get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db():
    """Create a fresh schema and session for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db: Session):
    """Create a test client bound to the test session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def user_factory(db: Session) -> Callable[..., User]:
    counter = {"n": 0}

    def _create(
        role: str = UserRole.LEARNER.value,
        name: Optional[str] = None,
        email: Optional[str] = None,
        **extra: Any,
    ) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"Test {role.title()} {counter['n']}",
            email=email or f"{role}{counter['n']}@example.com",
            hashed_password=_HASHED_TEST_PASSWORD,
            role=role,
            **extra,
        )
        db.add(user)
        db.commit()
        return user

    return _create


@pytest.fixture
def tutor_factory(db: Session, user_factory: Callable[..., User]) -> Callable[..., Tutor]:
    def _create(**profile: Any) -> Tutor:
        user = user_factory(role=UserRole.TUTOR.value, name=profile.pop("name", None))
        tutor = Tutor(
            user_id=user.id,
            bio=profile.pop("bio", "Experienced tutor"),
            hourly_rate=profile.pop("hourly_rate", 40.0),
            specialties=profile.pop("specialties", ["Python"]),
            availability=profile.pop("availability", "Weekdays only"),
            session_duration="1 hour",
            language="English",
            timezone="UTC-05:00 Eastern Time",
            **profile,
        )
        db.add(tutor)
        db.commit()
        return tutor

    return _create


@pytest.fixture
def category(db: Session) -> CourseCategory:
    category = CourseCategory(name="Programming")
    db.add(category)
    db.commit()
    return category


@pytest.fixture
def course_factory(db: Session) -> Callable[..., Course]:
    def _create(tutor: Tutor, **fields: Any) -> Course:
        values: Dict[str, Any] = {
            "title": "Python for Beginners",
            "short_description": "Learn Python from scratch",
            "overview": "Variables, functions and a small project.",
            "difficulty": "beginner",
            "prerequisites": [],
            "skills_learned": ["Python basics"],
            "total_hours": 10,
            "schedule": [{"days": ["monday"], "startTime": "18:00", "endTime": "19:00", "timezone": "UTC"}],
            "trial_rate": 20.0,
            "full_course_rate": 200.0,
        }
        values.update(fields)
        course = Course(tutor_id=tutor.id, **values)
        db.add(course)
        db.commit()
        return course

    return _create


@pytest.fixture
def learner(user_factory: Callable[..., User]) -> User:
    return user_factory(role=UserRole.LEARNER.value, name="Alex Learner", email="alex@example.com")


@pytest.fixture
def tutor(tutor_factory: Callable[..., Tutor]) -> Tutor:
    return tutor_factory(name="Sarah Tutor", specialties=["React", "Python"])


@pytest.fixture
def course(course_factory: Callable[..., Course], tutor: Tutor, category: CourseCategory) -> Course:
    return course_factory(tutor, category_id=category.id)


@pytest.fixture
def learner_headers(learner: User) -> Dict[str, str]:
    return auth_headers_for(learner)


@pytest.fixture
def tutor_headers(tutor: Tutor) -> Dict[str, str]:
    return auth_headers_for(tutor.user)


@pytest.fixture
def enrollment(db: Session, learner: User, course: Course) -> Enrollment:
    enrollment = Enrollment(student_id=learner.id, course_id=course.id)
    db.add(enrollment)
    db.commit()
    return enrollment


@pytest.fixture
def booking_factory(db: Session) -> Callable[..., Booking]:
    def _create(learner: User, course: Course, with_payment: bool = True, **fields: Any) -> Booking:
        booking = Booking(
            learner_id=learner.id,
            tutor_id=course.tutor_id,
            course_id=course.id,
            session_date=fields.pop("session_date", utc_now() - timedelta(days=1)),
            status=fields.pop("status", BookingStatus.COMPLETED.value),
            **fields,
        )
        if with_payment:
            booking.payment = Payment(
                amount=course.trial_rate,
                payment_status=PaymentStatus.COMPLETED.value,
                transaction_id="txn_test",
            )
        db.add(booking)
        db.commit()
        return booking

    return _create
