from datetime import datetime
from sqlalchemy import Integer, String, Numeric, LargeBinary, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from ..db import Base

class Hotel(Base):
    __tablename__ = "hotels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    img_data: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    img_content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
