from sqlalchemy import Column, String, BigInteger, Boolean, UniqueConstraint

from .base import Base, order_index_column


class User(Base):
    __tablename__ = 'users'

    order_index = order_index_column()
    id = Column(String(36), nullable=False, unique=True)
    # RFC 5321 caps addresses at 254 characters
    email = Column(String(254), nullable=False, unique=True)
    nick = Column(String(16), nullable=False, unique=True)
    bio = Column(String(255), nullable=False, default='')
    subscriber_count = Column(BigInteger, nullable=False, default=0)
    subscription_count = Column(BigInteger, nullable=False, default=0)
    post_count = Column(BigInteger, nullable=False, default=0)
    created = Column(BigInteger, nullable=False)
    moderator = Column(Boolean, nullable=False, default=False)
    admin = Column(Boolean, nullable=False, default=False)


class Subscription(Base):
    __tablename__ = 'subs'

    order_index = order_index_column()
    subscriber = Column(String(36), nullable=False)
    subscription = Column(String(36), nullable=False)
    created = Column(BigInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint('subscriber', 'subscription', name='no_dupe_subscriptions'),
    )
