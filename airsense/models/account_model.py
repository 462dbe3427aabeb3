from sqlalchemy import Column, BigInteger, Integer, Text, TIMESTAMP, Boolean
from sqlalchemy.sql import func
from airsense.models.base import Base


class Account(Base):
    __tablename__ = "account_tbl"

    account_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, server_default="1")
    last_login = Column(TIMESTAMP(timezone=True), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
