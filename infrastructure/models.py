from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.sql import func
from infrastructure.database import Base


FEE_STATE_ID = 1


class FeeStateModel(Base):
    __tablename__ = "fee_state"

    # A single row with a fixed key; a second insert violates the primary key
    id = Column(Integer, primary_key=True, default=FEE_STATE_ID, autoincrement=False)
    percent = Column(Integer, nullable=False)
    owner = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class SupportedTokenModel(Base):
    __tablename__ = "supported_tokens"

    id = Column(Integer, primary_key=True, index=True)
    token_id = Column(String(64), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_supported_token_id', 'token_id', unique=True),
    )
