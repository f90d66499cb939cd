"""
Shared fixtures: a testing app on in-memory SQLite with a small device fleet
"""
import pytest

from app import create_app
from models import db, Device


@pytest.fixture
def app():
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def devices(app):
    """Roster devices QA-001..QA-003 plus one device outside the roster"""
    rows = [
        Device(barcode='QA-001', hotel_id=10, hotel_room_number='101', batterylv=90),
        Device(barcode='QA-002', hotel_id=10, hotel_room_number='102', batterylv=20),
        Device(barcode='QA-003', hotel_id=11, hotel_room_number='201', batterylv=5),
        Device(barcode='OTHER-1', hotel_id=12, hotel_room_number='301', batterylv=100),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows
