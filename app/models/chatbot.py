"""
Models: ChatbotSettings, FAQ
"""

from db import db, new_id, now_utc


class ChatbotSettings(db.Model):
    __tablename__ = "chatbot_settings"

    id = db.Column(db.Integer, primary_key=True)
    is_enabled = db.Column(db.Boolean, default=True, nullable=False)
    bot_name = db.Column(db.String(100), default="Nexi")
    welcome_message = db.Column(db.Text, default="Hi! How can I help you today?")
    placeholder_text = db.Column(db.String(200), default="Ask me anything...")

    def to_dict(self):
        return {
            "id": self.id,
            "is_enabled": self.is_enabled,
            "bot_name": self.bot_name,
            "welcome_message": self.welcome_message,
            "placeholder_text": self.placeholder_text,
        }


class FAQ(db.Model):
    __tablename__ = "faqs"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    question = db.Column(db.Text, nullable=False)
    answer = db.Column(db.Text, nullable=False)
    keywords = db.Column(db.Text, nullable=False)  # Comma separated
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "keywords": self.keywords,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
