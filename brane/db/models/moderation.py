from sqlalchemy import Column, String, BigInteger, Boolean, Index

from .base import Base, order_index_column


class Ban(Base):
    __tablename__ = 'bans'

    order_index = order_index_column()
    id = Column(String(36), nullable=False, unique=True)
    banner = Column(String(36), nullable=False)
    banned = Column(String(36), nullable=False)
    reason = Column(String(255), nullable=True)
    created = Column(BigInteger, nullable=False)
    # Ignored when forever is set
    expires = Column(BigInteger, nullable=False, default=0)
    forever = Column(Boolean, default=False)

    __table_args__ = (
        Index('idx_bans_banned', 'banned'),
    )


class Report(Base):
    __tablename__ = 'reports'

    order_index = order_index_column()
    id = Column(String(36), nullable=False, unique=True)
    reporter = Column(String(36), nullable=False)
    reported = Column(String(36), nullable=False)
    type = Column(String(31), nullable=False)
    reason = Column(String(255), nullable=False)
    created = Column(BigInteger, nullable=False)
    resolved = Column(Boolean, nullable=False, default=False)
    resolution = Column(String(255), nullable=False, default='')

    __table_args__ = (
        Index('idx_reports_resolved', 'resolved'),
    )
