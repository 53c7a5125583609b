"""
Dormitory Open Data - Test Configuration and Fixtures
"""
import os
from datetime import date, datetime
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Set testing environment before the app reads its settings
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['ENVIRONMENT'] = 'test'
os.environ['LOG_LEVEL'] = 'WARNING'

from app.config.settings import Settings
from app.db.init_db import drop_db, init_db
from app.db.session import SessionLocal, engine, get_db
from app.main import app
from app.models import AcceptedApplication, Application, Dormitory, Payment, Room
from app.repositories.base.repository_factory import RepositoryFactory


@pytest.fixture(scope='function')
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    init_db(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_db(engine)


@pytest.fixture
def repositories(db_session: Session) -> RepositoryFactory:
    return RepositoryFactory(db_session)


@pytest.fixture
def config() -> Settings:
    return Settings(DATABASE_URL='sqlite://', ENVIRONMENT='test')


@pytest.fixture
def seeded(db_session: Session) -> Session:
    """
    Three dormitories, four rooms and a handful of applications.

    Occupancy after seeding:
        r1 (dorm d1, 2 beds)  2 accepted -> full
        r2 (dorm d1, 3 beds)  0 accepted
        r3 (dorm d2, 1 bed)   2 accepted -> overbooked by one
        r4 (dorm d2, 2 beds)  0 accepted
        d3 has no rooms
    """
    db_session.add_all([
        Dormitory(
            id='d1',
            name='Dom Ivo Lola Ribar',
            address='Bulevar Kralja Aleksandra 10',
            phone='+381 11 000 111',
            email='Lola@Dom.rs',
        ),
        Dormitory(id='d2', name='Dom Studentski Grad', address='Narodnih heroja 5'),
        Dormitory(id='d3', name='Dom Akademac', address='Ćirila i Metodija 3'),
    ])
    db_session.add_all([
        Room(id='r1', dormitory_id='d1', bed_capacity=2, amenities=['klima', 'terasa']),
        Room(id='r2', dormitory_id='d1', bed_capacity=3, amenities=['klima']),
        Room(id='r3', dormitory_id='d2', bed_capacity=1, amenities=['ablak']),
        Room(id='r4', dormitory_id='d2', bed_capacity=2, amenities=[]),
    ])
    db_session.add_all([
        Application(id='a1', student_index='RA-1/2022', grade=9, room_id='r1',
                    created_at=datetime(2022, 11, 1, 12, 0)),
        Application(id='a2', student_index='RA-2/2023', grade=8, room_id='r1',
                    created_at=datetime(2023, 11, 5, 9, 30)),
        Application(id='a3', student_index='RA-3/2023', grade=7, room_id='r2',
                    created_at=datetime(2023, 12, 1, 8, 0)),
        Application(id='a4', student_index='RA-4/2023', grade=10, room_id='r3',
                    created_at=datetime(2023, 10, 15, 10, 0)),
        Application(id='a5', student_index='RA-5/2024', grade=6, room_id='r4', is_active=False,
                    created_at=datetime(2024, 10, 20, 14, 0)),
    ])
    db_session.add_all([
        AcceptedApplication(id='x1', application_id='a1', student_index='RA-1/2022', grade=9,
                            room_id='r1', academic_year='2022/2023'),
        AcceptedApplication(id='x2', application_id='a2', student_index='RA-2/2023', grade=8,
                            room_id='r1', academic_year='2023/2024'),
        AcceptedApplication(id='x3', application_id='a4', student_index='RA-4/2023', grade=10,
                            room_id='r3', academic_year='2023/2024'),
        AcceptedApplication(id='x4', student_index='RA-9/2023', grade=8,
                            room_id='r3', academic_year='2023/2024'),
    ])
    db_session.add_all([
        Payment(id='p1', accepted_application_id='x1', amount=Decimal('10000.00'),
                payment_period='2022-10', status='paid', due_date=date(2022, 10, 15),
                paid_at=datetime(2022, 10, 10, 12, 0)),
        Payment(id='p2', accepted_application_id='x2', amount=Decimal('10000.00'),
                payment_period='2023-10', status='pending', due_date=date(2020, 1, 1)),
        Payment(id='p3', accepted_application_id='x3', amount=Decimal('10000.00'),
                payment_period='2099-10', status='pending', due_date=date(2099, 1, 1)),
    ])
    db_session.commit()
    return db_session


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
