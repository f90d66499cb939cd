"""
Device Selection Utilities
Picks the roster devices that have enough battery to receive a broadcast
"""
from typing import Dict, Iterable, List
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from models import db, Device


class DataAccessError(Exception):
    """Raised when devices cannot be read from the database"""
    pass


def select_devices(barcodes: Iterable[str], min_battery_level: int) -> List[Dict]:
    """
    Retrieve eligible devices from the database

    Args:
        barcodes: Device barcodes to consider
        min_battery_level: Minimum battery level (inclusive)

    Returns:
        List of dicts with barcode, hotel_id and hotel_room_number
    """
    barcodes = list(barcodes)
    if not barcodes:
        current_app.logger.warning("No device barcodes configured")
        return []

    try:
        results = Device.query.filter(
            Device.barcode.in_(barcodes),
            Device.batterylv >= min_battery_level
        ).order_by(Device.id).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to query devices: {e}")
        raise DataAccessError(f"Device query failed: {e}") from e

    current_app.logger.info(f"Found {len(results)} devices")

    return [
        {
            'barcode': device.barcode,
            'hotel_id': device.hotel_id,
            'hotel_room_number': device.hotel_room_number,
        }
        for device in results
    ]
