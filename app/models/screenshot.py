"""
Model: Screenshot
"""

from db import db, new_id


class Screenshot(db.Model):
    __tablename__ = "movie_screenshots"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    movie_id = db.Column(db.String(36), db.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = db.Column(db.String, nullable=False)
    position = db.Column(db.Integer, default=0)

    def to_dict(self):
        return {"id": self.id, "image_url": self.image_url, "position": self.position}
