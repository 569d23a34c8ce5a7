# contact_database.py

from extensions import db
from utils.datetime_utils import utc_now


class Contact(db.Model):
    """A message submitted through the public contact form."""

    __tablename__ = 'contact_messages'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    # Column names predate this model and are kept for existing databases
    email = db.Column('email_address', db.String(100), nullable=False)
    phone = db.Column('phone_number', db.String(20), nullable=False)
    message = db.Column('message_text', db.Text, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utc_now)
    # Soft delete marker; repositories filter on deleted_at IS NULL
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)

    # Fields a caller may set; the rest are owned by the persistence layer
    USER_FIELDS = ('full_name', 'email', 'phone', 'message')

    def __repr__(self):
        return f'<Contact {self.id} {self.email!r}>'
