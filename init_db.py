"""
Database Initialization Script
Run this script to create the message tables and seed sample devices
"""
import os
from app import create_app
from models import db, Device


def init_database():
    """Initialize database with tables and seed data"""

    app = create_app(start_scheduler=False)

    with app.app_context():
        # Create all tables
        print("Creating database tables...")
        db.create_all()

        # Sample roster devices for development
        if os.getenv('FLASK_ENV', 'development') == 'development' and Device.query.count() == 0:
            print("Adding sample devices for development...")
            for i, barcode in enumerate(['QA-001', 'QA-002', 'QA-003'], start=1):
                db.session.add(Device(
                    barcode=barcode,
                    hotel_id=1 if i < 3 else 2,
                    hotel_room_number=str(100 + i),
                    batterylv=80
                ))

        db.session.commit()

        print("\n" + "="*50)
        print("Database initialized successfully!")
        print("="*50)
        print("\nSet QA_DEVICES=QA-001,QA-002,QA-003 to target the sample devices")
        print("="*50 + "\n")


if __name__ == '__main__':
    init_database()
