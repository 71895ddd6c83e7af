from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base

CHIRP_MAX_LENGTH = 140


class Chirp(BaseModel, Base):
    __tablename__ = "chirps"

    body = Column(String(CHIRP_MAX_LENGTH), nullable=False)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user = relationship("User", back_populates="chirps")
