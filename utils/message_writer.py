"""
Message Writer
Persists a broadcast message with its hotels, info marker and recipients
"""
from datetime import datetime
from typing import Dict, List, Optional
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from models import (
    db, Message, MessageHotel, MessageInfo, MessageRecipient,
    MESSAGE_STATUS_PENDING, MESSAGE_INFO_STATUS_INITIALISING, MESSAGE_INFO_STATUS_PENDING
)

SEND_AT_FORMAT = '%Y-%m-%d %H:%M:%S'


class PersistenceError(Exception):
    """Raised when a message row cannot be written"""
    pass


class MessageWriter:
    """
    Writes the rows of one broadcast

    To send a message we need to:
        1. Create Message
        2. Create MessageHotels
        3. Create MessageInfo
        4. Create MessageRecipients
        5. Set the MessageInfo status to pending

    Each step commits before the next one starts. A failed step rolls back
    its own work only; rows from earlier steps are left in place.
    """

    ACTION = 'broadcastmessage'
    DEVICE_STATUS = 'specific'

    def __init__(self, user_id: int, expiry: int = 2, zone_id: int = 1, category: str = 'f&b'):
        self.user_id = user_id
        self.expiry = expiry
        self.zone_id = zone_id
        self.category = category

    def write(self, devices: List[Dict], content: str, locales: str,
              send_at: datetime) -> Optional[Dict]:
        """
        Write a broadcast for the given devices

        Args:
            devices: Selected devices (barcode, hotel_id, hotel_room_number)
            content: Rendered message content
            locales: Comma-joined locale list
            send_at: Send time, naive local time

        Returns:
            Dict with id, message_info_id, send_at and devices,
            or None when there is nothing to send
        """
        if not devices:
            current_app.logger.warning("No devices to send to, nothing written")
            return None

        message_id = self.create_message(devices, content, locales, send_at)
        self.create_message_hotels([d['hotel_id'] for d in devices], message_id)
        message_info_id = self.create_message_info(message_id, send_at)
        self.create_message_recipients(devices, message_id, message_info_id)
        self.mark_pending(message_info_id)

        current_app.logger.info(
            f"QA message {message_id} written for {len(devices)} devices (info={message_info_id})"
        )

        return {
            'id': message_id,
            'message_info_id': message_info_id,
            'send_at': send_at.strftime(SEND_AT_FORMAT),
            'devices': devices,
        }

    def create_message(self, devices: List[Dict], content: str, locales: str,
                       send_at: datetime) -> int:
        """Create the Message row and return its id"""
        message = Message(
            action=self.ACTION,
            user_id=self.user_id,
            status=MESSAGE_STATUS_PENDING,
            device_status=self.DEVICE_STATUS,
            hotel_ids=','.join(str(d['hotel_id']) for d in devices),
            hotel_room_numbers=','.join(f"{d['hotel_id']}:{d['hotel_room_number']}" for d in devices),
            dates=send_at.date(),
            time=send_at.time().replace(microsecond=0),
            expiry=self.expiry,
            zone_id=self.zone_id,
            locales=locales,
            content=content,
            category=self.category
        )

        self._commit([message], 'message')

        if not message.id:
            raise PersistenceError("Message insert returned no id")

        return message.id

    def create_message_hotels(self, hotel_ids: List[int], message_id: int) -> List[int]:
        """Create one MessageHotel per distinct hotel id"""
        # Remove duplicate hotel_id, keep first-seen order
        hotel_ids = list(dict.fromkeys(hotel_ids))

        rows = [MessageHotel(message_id=message_id, hotel_id=hotel_id) for hotel_id in hotel_ids]
        self._commit(rows, 'message hotels')

        return hotel_ids

    def create_message_info(self, message_id: int, send_at: datetime) -> int:
        """Create the MessageInfo row in initialising state and return its id"""
        info = MessageInfo(
            message_id=message_id,
            send_at=send_at.replace(microsecond=0),
            status=MESSAGE_INFO_STATUS_INITIALISING,
            expiry=self.expiry
        )

        self._commit([info], 'message info')

        if not info.id:
            raise PersistenceError("MessageInfo insert returned no id")

        return info.id

    def create_message_recipients(self, devices: List[Dict], message_id: int,
                                  message_info_id: int) -> int:
        """Create one MessageRecipient per device"""
        rows = [
            MessageRecipient(
                message_id=message_id,
                message_info_id=message_info_id,
                hotel_id=device['hotel_id'],
                hotel_room_number=device['hotel_room_number']
            )
            for device in devices
        ]
        self._commit(rows, 'message recipients')

        return len(rows)

    def mark_pending(self, message_info_id: int) -> None:
        """Hand the batch to the delivery system"""
        try:
            updated = MessageInfo.query.filter_by(id=message_info_id).update(
                {'status': MESSAGE_INFO_STATUS_PENDING}
            )
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError(f"Failed to mark message info {message_info_id} pending: {e}") from e

        if not updated:
            raise PersistenceError(f"Message info {message_info_id} not found")

    @staticmethod
    def _commit(rows: List[db.Model], what: str) -> None:
        """Add rows in one unit of work and commit"""
        try:
            db.session.add_all(rows)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise PersistenceError(f"Failed to create {what}: {e}") from e
