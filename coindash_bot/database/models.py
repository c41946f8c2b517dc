from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

class ScoreDocument(Base):
    """Score row written by the game; the bot only reads this table."""
    __tablename__ = 'coindash_scores'

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=True, index=True)

    # Nullable to mirror partially written game documents
    high_score = Column(Integer, nullable=True, index=True)
    referrals = Column(Integer, nullable=True)

    # Metadata
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def to_document(self):
        """Field names as the game writes them to the document store"""
        return {
            'username': self.username,
            'highScore': self.high_score,
            'referrals': self.referrals,
        }

    def __repr__(self):
        return f"<ScoreDocument(username='{self.username}', high_score={self.high_score}, referrals={self.referrals})>"
