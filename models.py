"""
QA Broadcast Database Models
SQLAlchemy ORM models for Device, Message, MessageHotel, MessageInfo and MessageRecipient
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Status strings consumed by the delivery system
MESSAGE_STATUS_PENDING = 'pending'
MESSAGE_INFO_STATUS_INITIALISING = 'initialising'
MESSAGE_INFO_STATUS_PENDING = 'pending'


class Device(db.Model):
    """In-room device, read-only for the sender"""
    __tablename__ = 'devices'

    id = db.Column(db.Integer, primary_key=True)
    barcode = db.Column(db.String(100), unique=True, nullable=False, index=True)
    hotel_id = db.Column(db.Integer, nullable=False, index=True)
    hotel_room_number = db.Column(db.String(20), nullable=False)
    batterylv = db.Column(db.Integer, nullable=True)  # Percent

    def __repr__(self):
        return f'<Device {self.barcode} hotel={self.hotel_id} room={self.hotel_room_number}>'


class Message(db.Model):
    """Broadcast message header, one row per send cycle"""
    __tablename__ = 'messages'

    id = db.Column(db.Integer, primary_key=True)
    action = db.Column(db.String(50), nullable=False)
    user_id = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), default=MESSAGE_STATUS_PENDING, nullable=False)
    device_status = db.Column(db.String(20), nullable=False)  # all, specific
    hotel_ids = db.Column(db.Text, nullable=False, default='')
    hotel_room_numbers = db.Column(db.Text, nullable=False, default='')
    dates = db.Column(db.Date, nullable=False)
    time = db.Column(db.Time, nullable=False)
    expiry = db.Column(db.Integer, nullable=False)
    zone_id = db.Column(db.Integer, nullable=False)
    locales = db.Column(db.String(255), nullable=False, default='')
    content = db.Column(db.Text, nullable=False, default='')
    category = db.Column(db.String(50), nullable=False)

    # Relationships
    hotels = db.relationship('MessageHotel', backref='message', lazy='dynamic')
    infos = db.relationship('MessageInfo', backref='message', lazy='dynamic')
    recipients = db.relationship('MessageRecipient', backref='message', lazy='dynamic')

    def __repr__(self):
        return f'<Message {self.id} action={self.action} status={self.status}>'


class MessageHotel(db.Model):
    """Hotel targeted by a message"""
    __tablename__ = 'message_hotels'

    id = db.Column(db.Integer, primary_key=True)
    message_id = db.Column(db.Integer, db.ForeignKey('messages.id'), nullable=False, index=True)
    hotel_id = db.Column(db.Integer, nullable=False)

    def __repr__(self):
        return f'<MessageHotel message={self.message_id} hotel={self.hotel_id}>'


class MessageInfo(db.Model):
    """Dispatch marker picked up by the delivery system once pending"""
    __tablename__ = 'message_infos'

    id = db.Column(db.Integer, primary_key=True)
    message_id = db.Column(db.Integer, db.ForeignKey('messages.id'), nullable=False, index=True)
    send_at = db.Column(db.DateTime, nullable=False)  # Local time in TIMEZONE
    status = db.Column(db.String(20), default=MESSAGE_INFO_STATUS_INITIALISING, nullable=False)
    expiry = db.Column(db.Integer, nullable=False)

    # Relationships
    recipients = db.relationship('MessageRecipient', backref='message_info', lazy='dynamic')

    @property
    def is_pending(self):
        """Check if the batch has been handed to the delivery system"""
        return self.status == MESSAGE_INFO_STATUS_PENDING

    def __repr__(self):
        return f'<MessageInfo {self.id} message={self.message_id} status={self.status}>'


class MessageRecipient(db.Model):
    """Room a message is delivered to"""
    __tablename__ = 'message_recipients'

    id = db.Column(db.Integer, primary_key=True)
    message_id = db.Column(db.Integer, db.ForeignKey('messages.id'), nullable=False, index=True)
    message_info_id = db.Column(db.Integer, db.ForeignKey('message_infos.id'), nullable=False, index=True)
    hotel_id = db.Column(db.Integer, nullable=False)
    hotel_room_number = db.Column(db.String(20), nullable=False)

    def __repr__(self):
        return f'<MessageRecipient message={self.message_id} hotel={self.hotel_id} room={self.hotel_room_number}>'
