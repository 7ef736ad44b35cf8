"""
Models: DMCARequest, ContentRequest, ContactMessage, Comment
Records submitted from the public site and triaged in the admin.
"""

from db import db, new_id, now_utc


class DMCARequest(db.Model):
    __tablename__ = "dmca_requests"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String)
    email = db.Column(db.String)
    company = db.Column(db.String)
    infringing_link = db.Column(db.String, nullable=False)
    original_link = db.Column(db.String)
    message = db.Column(db.Text)
    status = db.Column(db.String(20), default="pending", nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "company": self.company,
            "infringing_link": self.infringing_link,
            "original_link": self.original_link,
            "message": self.message,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class ContentRequest(db.Model):
    __tablename__ = "content_requests"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    content_name = db.Column(db.String, nullable=False)
    email = db.Column(db.String)
    status = db.Column(db.String(20), default="pending", nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "content_name": self.content_name,
            "email": self.email,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class ContactMessage(db.Model):
    __tablename__ = "contact_messages"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String)
    email = db.Column(db.String)
    subject = db.Column(db.String)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    movie_id = db.Column(db.String(36), db.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String)
    email = db.Column(db.String)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        content = self.content
        return {
            "id": self.id,
            "movie_id": self.movie_id,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "movie": {"title": content.title, "slug": content.slug} if content else None,
        }
